"""
Massa Python Client

Account key management, operation signing and confirmation tracking for
the Massa network, plus thin JSON-RPC clients to reach a node.
"""

# Errors
from .runtime.errors import *

# Keys, signing and confirmation tracking
from .crypto import CryptoBackend, Secp256k1SchnorrBackend, get_default_backend, set_default_backend
from .keys import *
from .signers import *
from .operations import *
from .types import *

# Node clients
from .client import ClientConfig, JsonRpcClient, JsonRpcMethod, PublicApiClient, WalletClient
from .recovery import RetryPolicy, FixedBackoff

__version__ = "0.1.0"
__all__ = [
    # Errors
    "ErrorCode", "MassaError", "DecodeError", "MismatchError", "MissingKeyMaterialError",
    "TooManyAccountsError", "UnknownSignerError", "NoSenderError", "SigningError",
    "InvalidSignatureLengthError", "SignatureVerificationError", "NetworkError", "JsonRpcError",
    "IncompleteResponseError", "ConfirmationLookupFailedError", "ConfirmationTimeoutError",
    "KeystoreError",

    # Crypto
    "CryptoBackend", "Secp256k1SchnorrBackend", "get_default_backend", "set_default_backend",

    # Keys
    "Account", "PartialAccount", "AccountFactory", "account_from_private_key",
    "account_from_entropy", "generate_account", "MAX_WALLET_ACCOUNTS", "Wallet", "WalletKeystore",

    # Signing
    "SIGNATURE_LENGTH", "Signature", "SigningEngine",

    # Confirmation
    "OperationStatus", "ConfirmationConfig", "PollState", "classify", "OperationStatusTracker",

    # Types
    "OperationRecord", "AddressInfo", "FullAccountView", "Slot", "NodeStatus",
    "TransactionData", "RollsData",

    # Clients
    "ClientConfig", "JsonRpcClient", "JsonRpcMethod", "PublicApiClient", "WalletClient",
    "RetryPolicy", "FixedBackoff",
]
