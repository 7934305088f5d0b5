"""Presentation definition generators"""

from oid4vp_frontend.adapter.output.prex.mdl_presentation_definition import (
    MDL_INPUT_DESCRIPTOR,
    mdl_presentation_definition,
)

__all__ = ["MDL_INPUT_DESCRIPTOR", "mdl_presentation_definition"]
