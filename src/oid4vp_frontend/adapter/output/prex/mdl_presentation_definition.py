"""Presentation definition requesting an ISO 18013-5 mobile driving licence"""

import copy
from typing import Any, Dict, Final

MDL_INPUT_DESCRIPTOR: Final[Dict[str, Any]] = {
    "id": "org.iso.18013.5.1.mDL",
    "name": "Mobile Driving Licence",
    "purpose": "We need to verify your mobile driving licence",
    "format": {
        "mso_mdoc": {
            "alg": ["ES256", "ES384", "ES512"],
        },
    },
    "constraints": {
        "fields": [
            {
                "path": ["$['org.iso.18013.5.1']['family_name']"],
                "intent_to_retain": False,
            },
        ],
    },
}


def mdl_presentation_definition() -> Dict[str, Any]:
    """Return a fresh copy; callers may mutate it"""
    return {
        "id": "test-presentation-id",
        "input_descriptors": [copy.deepcopy(MDL_INPUT_DESCRIPTOR)],
    }
