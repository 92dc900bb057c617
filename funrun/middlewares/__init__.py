from funrun.middlewares.sequencer_middleware import SequencerMiddleware, SESSION_KEY
from funrun.middlewares.rate_limit_middleware import RateLimitMiddleware

__all__ = ["SequencerMiddleware", "SESSION_KEY", "RateLimitMiddleware"]
