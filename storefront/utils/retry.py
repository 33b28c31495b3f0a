# storefront/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type
import requests
import redis


def _policy(errors, attempts: int, base: float, cap: float):
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=base, min=base, max=cap),
        retry=retry_if_exception_type(errors),
    )


#retry tylko na bledy transportu, 4xx/5xx od uslugi nie sa ponawiane
def http_retry(attempts: int = 3):
    return _policy((requests.ConnectionError, requests.Timeout), attempts, base=0.3, cap=3)


#rewokacja i broker celery
def redis_retry(attempts: int = 3):
    return _policy(redis.RedisError, attempts, base=0.2, cap=2)
