"""Claude Code hook I/O: reading PreToolUse input and formatting responses."""

HOOK_EVENT = "PreToolUse"


def is_bash_event(input_data: dict) -> bool:
    """True for a Bash tool call; other tools are never rewritten."""
    event = input_data.get("hook_event_name", HOOK_EVENT)
    return event == HOOK_EVENT and input_data.get("tool_name") == "Bash"


def get_tool_input(input_data: dict) -> dict:
    tool_input = input_data.get("tool_input")
    return tool_input if isinstance(tool_input, dict) else {}


def get_command(input_data: dict) -> str | None:
    """Extract the command string from hook input."""
    command = get_tool_input(input_data).get("command")
    return command if isinstance(command, str) else None


def format_pretool_rewrite(tool_input: dict, new_command: str, allow_reason: str | None = None) -> dict:
    """Format a PreToolUse response that rewrites the command.

    All original tool_input fields are preserved; only ``command`` changes.
    Without ``allow_reason`` no permission decision is emitted, so the
    user's own permission rules decide whether the rewritten command runs.
    """
    output = {
        "hookEventName": HOOK_EVENT,
        "updatedInput": {**tool_input, "command": new_command},
    }
    if allow_reason:
        output["permissionDecision"] = "allow"
        output["permissionDecisionReason"] = allow_reason
    return {"hookSpecificOutput": output}
