"""JOSE adapter"""

from oid4vp_frontend.adapter.output.jose.jose_service_impl import JoseServiceImpl

__all__ = ["JoseServiceImpl"]
