"""OpenID4VP verifier frontend

Starts presentation transactions against a verifier backend, binds their
secrets to the browser session and correlates the wallet's response.
"""

__version__ = "0.1.0"
