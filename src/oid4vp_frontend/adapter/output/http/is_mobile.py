"""Mobile detection using user-agents"""

from user_agents import parse


def default_is_mobile(user_agent: str) -> bool:
    """
    Tell whether a User-Agent header belongs to a phone.

    Tablets and desktops are not mobile: they get the cross-device (QR code)
    flow rather than a same-device redirect.
    """
    if not user_agent:
        return False
    return parse(user_agent).is_mobile
