"""Auth gate for the hosted identity service."""

from taskpad_mcp.auth.gate import AuthGate, AuthResult, get_auth_gate, set_auth_gate, validate_credentials

__all__ = ["AuthGate", "AuthResult", "get_auth_gate", "set_auth_gate", "validate_credentials"]
