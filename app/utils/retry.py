# app/utils/retry.py
import logging

import redis
from tenacity import before_sleep_log, retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from app.utils.logging import get_logger
from app.utils.settings import REDIS_RETRY_ATTEMPTS

logger = get_logger(__name__)

#tylko bledy sieci, ResponseError (zla komenda/typ klucza) nie zniknie po ponowieniu
TRANSIENT_REDIS_ERRORS = (redis.ConnectionError, redis.TimeoutError)


def redis_retry(attempts: int = REDIS_RETRY_ATTEMPTS):
    """Ponawianie operacji na redisie z backoffem, po ostatniej probie wyjatek leci dalej."""
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(TRANSIENT_REDIS_ERRORS),
        before_sleep=before_sleep_log(logger, logging.WARNING),
    )
