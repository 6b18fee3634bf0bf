from .routes import mount_responder, mounts_router, router

__all__ = ["router", "mount_responder", "mounts_router"]
