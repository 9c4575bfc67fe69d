"""Rate limiting for write endpoints (SlowAPI).

One Limiter is shared by main (app.state.limiter) and the route modules.
Clients are keyed by remote address. The write limit is read from
settings.write_rate_limit each time a request is checked, so tests and
deployments can change it through the environment.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import get_settings

limiter = Limiter(key_func=get_remote_address)


def _write_limit() -> str:
    return get_settings().write_rate_limit


# Applied to POST / PATCH / DELETE routes; the route must take `request: Request`.
limit_writes = limiter.limit(_write_limit)
