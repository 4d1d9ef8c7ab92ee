from rest_framework.throttling import ScopedRateThrottle


class ScopedRateThrottleIsolated(ScopedRateThrottle):
    """
    Include the resolved rate in the cache key to avoid collisions
    when tests or environments override DEFAULT_THROTTLE_RATES.
    """
    def get_cache_key(self, request, view):
        key = super().get_cache_key(request, view)
        if key is None:
            return None
        return f"{key}:{self.get_rate() or 'none'}"


class PropertyViewThrottle(ScopedRateThrottleIsolated):
    """
    View beacons from anonymous browsers are keyed by their session id when
    one is sent, so visitors behind one NAT do not share a bucket.
    """
    def get_cache_key(self, request, view):
        user = getattr(request, "user", None)
        session_id = (request.headers.get("X-Session-Id") or "").strip()
        if not session_id:
            try:
                session_id = str(request.data.get("sessionId") or "").strip()
            except AttributeError:
                session_id = ""
        if (user and user.is_authenticated) or not session_id:
            return super().get_cache_key(request, view)
        key = self.cache_format % {"scope": self.scope, "ident": f"session:{session_id[:64]}"}
        return f"{key}:{self.get_rate() or 'none'}"
