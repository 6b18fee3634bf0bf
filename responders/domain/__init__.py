"""Pure responder domain: request context, init parameters, responders.

These modules are free of FastAPI/HTTP concerns so they can be unit-tested
without a server and hosted by any adapter that provides a RequestContext.
"""
__all__ = ["exchange", "config_store", "responders"]
