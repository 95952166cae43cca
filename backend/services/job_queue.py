"""
Redis job queue - hands verification work to the external engine

Producer side only: LPUSH a JSON job, the engine BRPOPs.

Queues:
- queue:verification → verification engine (compiles source, compares WASM hash)
"""
import json
import logging

import redis.asyncio as redis

logger = logging.getLogger(__name__)


class JobQueue:
    """
    Thin producer over a Redis list.

    Each job is consumed by exactly ONE engine worker. The registry
    API never dequeues.
    """

    VERIFICATION_QUEUE = 'queue:verification'

    def __init__(self, redis_url: str):
        self.redis_url = redis_url
        self.redis = None

    async def connect(self):
        self.redis = await redis.from_url(self.redis_url, decode_responses=True)
        logger.info("Job queue connected")

    async def close(self):
        if self.redis:
            await self.redis.close()

    async def enqueue(self, queue_name: str, job: dict) -> int:
        """
        Push a job; returns the queue depth after the push.

        Example:
            await queue.enqueue(JobQueue.VERIFICATION_QUEUE, {
                'verification_id': '...',
                'contract_id': '...',
            })
        """
        depth = await self.redis.lpush(queue_name, json.dumps(job))
        logger.debug(f"Enqueued job on {queue_name} (depth={depth})")
        return depth
