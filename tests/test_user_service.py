import threading
import uuid
from concurrent.futures import ThreadPoolExecutor

from services.users import UserService, user_key


class UuidIdentityProvider:
    def create_user(self, email, password, display_name=None):
        return str(uuid.uuid4())


def test_concurrent_first_signups_grant_one_admin(store):
    service = UserService(store, UuidIdentityProvider())
    start = threading.Barrier(8)

    def sign_up(n):
        start.wait()
        return service.sign_up(f"user{n}@example.com", "secret", f"user{n}", "")

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(sign_up, range(8)))

    assert sum(r["isFirstUser"] for r in results) == 1
    admins = [u for u in store.get_by_prefix("user:") if u["isAdmin"]]
    assert len(admins) == 1
    assert admins[0]["isVerified"]


def test_existing_profiles_block_the_first_user_claim(store, make_user):
    make_user("veteran")
    service = UserService(store, UuidIdentityProvider())

    result = service.sign_up("new@example.com", "secret", "new", "New")

    assert result["isFirstUser"] is False
    assert store.get(user_key(result["userId"]))["isAdmin"] is False
