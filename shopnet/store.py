import json
import uuid
from datetime import datetime, timezone

import redis

from shopnet.errors import StoreFailure

PRODUCT_KEY = "products:{}"
CREATED_INDEX = "products:by_created"


def _timestamp(now):
    # Millisecond precision, UTC, "Z" suffix: 2024-05-01T12:00:00.000Z
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


class ProductStore:
    """Products kept as JSON documents in Redis.

    Every product lives under ``products:<id>``. The sorted set
    ``products:by_created`` scores ids by creation time in milliseconds and
    gives the newest-first listing order.
    """

    def __init__(self, client, clock=None):
        self.client = client
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    @classmethod
    def from_config(cls, config):
        client = redis.Redis(
            host=config["REDIS_HOST"],
            port=config["REDIS_PORT"],
            db=config["REDIS_DB"],
            password=config["REDIS_PASSWORD"],
            decode_responses=True,
        )
        return cls(client)

    def create(self, name, price):
        now = self.clock()
        created_at = _timestamp(now)
        product = {
            "id": uuid.uuid4().hex,
            "name": name,
            "price": price,
            "createdAt": created_at,
            "updatedAt": created_at,
        }
        score = int(now.timestamp() * 1000)

        try:
            pipe = self.client.pipeline(transaction=True)
            pipe.set(PRODUCT_KEY.format(product["id"]), json.dumps(product))
            pipe.zadd(CREATED_INDEX, {product["id"]: score})
            pipe.execute()
        except redis.exceptions.RedisError as e:
            raise StoreFailure(f"could not save product: {e}") from e

        return product

    def list_all(self):
        try:
            ids = self.client.zrevrange(CREATED_INDEX, 0, -1)
            if not ids:
                return []
            documents = self.client.mget([PRODUCT_KEY.format(i) for i in ids])
        except redis.exceptions.RedisError as e:
            raise StoreFailure(f"could not list products: {e}") from e

        products = []
        for doc in documents:
            # Index entry without a document; nothing to return for it.
            if doc is None:
                continue
            try:
                products.append(json.loads(doc))
            except ValueError as e:
                raise StoreFailure(f"corrupt product document: {e}") from e
        return products

    def ping(self):
        try:
            return bool(self.client.ping())
        except redis.exceptions.RedisError:
            return False
