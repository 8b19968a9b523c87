__all__ = [
    "verify_password",
    "get_password_hash",
    "authenticate_user",
    "authorize",
    "require_identity",
    "utcnow",
    "combine_schedule",
]


def __getattr__(name):
    if name in {
        "verify_password",
        "get_password_hash",
        "authenticate_user",
        "authorize",
        "require_identity",
    }:
        from . import security as _security
        return getattr(_security, name)
    if name in {"utcnow", "combine_schedule"}:
        from . import dates as _dates
        return getattr(_dates, name)
    raise AttributeError(f"module 'mentorslot.utils' has no attribute '{name}'")
