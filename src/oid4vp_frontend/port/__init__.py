"""Port layer - Interfaces between the services and the outside world

Input Ports (Use Cases):
- InitTransaction: Start a presentation transaction
- GetWalletResponse: Retrieve and verify the wallet's response

Output Ports (External Dependencies):
- Fetcher: Typed JSON calls to the verifier backend
- Session: Per-browser storage of transaction secrets
- JoseService: Ephemeral keys and JARM verification
- MdocVerifier: Credential verification
- Generators: nonce, wallet redirect URI, response redirect template
- Logger: Structured logging
"""

from oid4vp_frontend.port.input import *
from oid4vp_frontend.port.output import *
