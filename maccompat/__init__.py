"""maccompat — is this Mac running the newest macOS its hardware supports?"""

__version__ = "0.1.0"
