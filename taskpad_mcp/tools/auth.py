"""Sign-in and sign-up MCP tools."""

import json

from mcp.types import ToolAnnotations

from taskpad_mcp.auth.gate import get_auth_gate
from taskpad_mcp.errors import TaskpadError
from taskpad_mcp.models.inputs import CredentialsInput
from taskpad_mcp.server import mcp


@mcp.tool(
    name="taskpad_sign_in",
    annotations=ToolAnnotations(
        title="Sign In",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=True,
    ),
)
async def taskpad_sign_in(params: CredentialsInput) -> str:
    """
    Sign in with email and password.

    Returns:
        JSON with the user, access token and the page to continue to, or an
        error message from the identity service
    """
    try:
        result = await get_auth_gate().sign_in(params.email, params.password)
    except TaskpadError as e:
        return f"Error: {e}"
    return json.dumps(result.model_dump(), indent=2)


@mcp.tool(
    name="taskpad_sign_up",
    annotations=ToolAnnotations(
        title="Sign Up",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=True,
    ),
)
async def taskpad_sign_up(params: CredentialsInput) -> str:
    """
    Create an account with email and password.

    When the service requires email confirmation, the result has
    confirmation_required=true and no access token.
    """
    try:
        result = await get_auth_gate().sign_up(params.email, params.password)
    except TaskpadError as e:
        return f"Error: {e}"
    return json.dumps(result.model_dump(), indent=2)
