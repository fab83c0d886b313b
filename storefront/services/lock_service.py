import uuid

import redis

from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje skrypt lua atomowo, nikt nie wcisnie sie miedzy GET a DEL


class LockService:
    """
    -blokada checkoutu per uzytkownik (jeden checkout naraz)
    -zwalnianie locka tylko przez wlasciciela (token)
    -TTL, lock nie zostaje na zawsze po padzie procesu
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def _checkout_key(user_id: int) -> str:
        return f"checkout:{user_id}:lock"

    @redis_retry()
    def acquire_checkout_lock(self, user_id: int, ttl: int) -> str | None:
        """Zwraca token wlasciciela albo None gdy lock jest zajety."""
        key = self._checkout_key(user_id)
        owner = uuid.uuid4().hex
        logger.info(f"Acquire lock {key}")
        #SET checkout:1:lock "<owner>" NX EX 60
        acquired = self.redis.set(name=key, value=owner, nx=True, ex=ttl)
        return owner if acquired else None

    @redis_retry()
    def release_checkout_lock(self, user_id: int, owner: str) -> bool:
        key = self._checkout_key(user_id)
        logger.info(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, owner)
        return bool(res)
