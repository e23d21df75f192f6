# app/middlewares/rate_limit.py
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.platform.response import error_response
from app.platform.utils.rate_limit import RateLimiter


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, limiter: RateLimiter, path_prefix: str = "/api"):
        super().__init__(app)
        self.limiter = limiter
        self.path_prefix = path_prefix

    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        # Only the API surface is rate-limited
        if not path.startswith(self.path_prefix):
            return await call_next(request)

        client_ip = request.client.host if request.client else "testclient"

        if not self.limiter.hit(client_ip):
            return error_response(
                error="Too many requests from this IP, please try again later.",
                status_code=429,
                headers={"Retry-After": str(self.limiter.retry_after(client_ip))},
            )

        return await call_next(request)
