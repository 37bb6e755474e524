"""System prompt builder with Anthropic prompt caching support."""

from typing import Optional


class SystemPromptBuilder:
    """Builds the database assistant's system prompt."""

    def __init__(self, extra_instructions: Optional[str] = None):
        """Initialize system prompt builder.

        Args:
            extra_instructions: Optional project-specific instructions
        """
        self.extra_instructions = extra_instructions

    def build_system_blocks(self, context: Optional[dict] = None) -> list[dict]:
        """Build system blocks with cache_control for Anthropic.

        The static instructions are marked for caching; the per-request
        context block is not.

        Args:
            context: Context blob (current page, selected option, databases)

        Returns:
            List of system text blocks
        """
        blocks = [
            {
                "type": "text",
                "text": self._build_core_identity(),
                "cache_control": {"type": "ephemeral"},
            },
            {
                "type": "text",
                "text": self._build_response_format(),
                "cache_control": {"type": "ephemeral"},
            },
        ]

        if self.extra_instructions:
            blocks.append({"type": "text", "text": self.extra_instructions})

        context_text = self.build_context_string(context)
        if context_text:
            blocks.append({"type": "text", "text": context_text})

        return blocks

    def build_context_string(self, context: Optional[dict]) -> str:
        """Render the context blob as a "Current Context" section.

        Args:
            context: Context blob

        Returns:
            Context section, or empty string if there is nothing to say
        """
        if not context:
            return ""

        parts = []
        if context.get("currentPage"):
            parts.append(f"Current page: {context['currentPage']}")
        if context.get("selectedOption"):
            parts.append(f"Selected option: {context['selectedOption']}")
        if context.get("selectedDatabase"):
            parts.append(f"Selected database: {context['selectedDatabase']}")

        databases = context.get("databases") or []
        if databases:
            db_list = "\n".join(
                f"- {db.get('name')} ({db.get('engine')}, {db.get('region')}, {db.get('status')})"
                for db in databases
            )
            parts.append(f"Available databases:\n{db_list}")

        known = {"currentPage", "selectedOption", "selectedDatabase", "databases"}
        for key, value in context.items():
            if key not in known and value not in (None, "", [], {}):
                parts.append(f"{key}: {value}")

        return "Current Context:\n" + "\n".join(parts) if parts else ""

    def _build_core_identity(self) -> str:
        return """You are an AI assistant for a database console. You help users design, create, \
query, and operate relational databases (RDS, Aurora, Aurora DSQL) through conversation.

Be concise and practical. Ask one clarifying question at a time when requirements are unclear. \
Never claim to have created or modified a resource unless the user confirmed the action."""

    def _build_response_format(self) -> str:
        return """## RESPONSE FORMAT

Always answer with a single JSON object inside a ```json code block:

```json
{
  "message": "Markdown text shown to the user",
  "component": {"type": "Table", "props": {}},
  "suggestedActions": [{"id": "short-id", "text": "Follow-up the user can click"}],
  "requiresConfirmation": false,
  "confirmAction": {"label": "Create", "variant": "primary", "action": "create-db", "params": {}}
}
```

Rules:
- "message" is required; every other field is optional.
- Use "component" only when a visual element (table, code view, key-value pairs, steps) helps.
- Offer 2-4 "suggestedActions" when there are natural next steps.
- Set "requiresConfirmation" and "confirmAction" before any action that creates, changes, \
or deletes a resource.
- Do not escape punctuation with backslashes inside strings.
- Keep responses small; split very large content across turns."""
