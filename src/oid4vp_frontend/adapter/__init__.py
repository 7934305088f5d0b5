"""Adapter layer - Infrastructure implementations"""

from oid4vp_frontend.adapter.output import *
