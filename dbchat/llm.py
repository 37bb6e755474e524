"""LLM abstraction layer for Anthropic Claude models."""

from dataclasses import dataclass
from typing import Any, Literal, Optional

from anthropic import Anthropic
from rich.console import Console

from dbchat.constants import SUPPORTED_MODELS
from dbchat.system_prompt import SystemPromptBuilder

console = Console(stderr=True)


@dataclass
class ModelDescriptor:
    """Descriptor for an LLM model."""

    provider: Literal["anthropic"]
    name: str
    max_output_tokens: int
    temperature: float = 0.7


@dataclass
class ModelReply:
    """Raw completion handed to the response interpreter."""

    text: str
    was_truncated: bool = False
    usage: Optional[dict[str, int]] = None


class LLM:
    """Anthropic Claude LLM interface."""

    def __init__(
        self,
        descriptor: ModelDescriptor,
        api_key: str,
        prompt_builder: Optional[SystemPromptBuilder] = None,
        timeout: float = 60.0,
    ):
        """Initialize LLM client.

        Args:
            descriptor: Model descriptor
            api_key: Anthropic API key
            prompt_builder: System prompt builder (default instructions if not given)
            timeout: Request timeout in seconds
        """
        self.descriptor = descriptor
        self.api_key = api_key
        self.prompt_builder = prompt_builder or SystemPromptBuilder()

        if descriptor.provider != "anthropic":
            raise ValueError(f"Only Anthropic models are supported. Got: {descriptor.provider}")

        self.client = Anthropic(api_key=api_key, timeout=timeout)

    def complete(
        self,
        messages: list[dict[str, Any]],
        context: Optional[dict] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> ModelReply:
        """Generate a completion for a conversation.

        Args:
            messages: List of message dicts with 'role' (user or agent) and 'content'
            context: Context blob appended to the system prompt
            temperature: Optional temperature override
            max_tokens: Optional max tokens override

        Returns:
            ModelReply with the completion text and truncation flag
        """
        temp = temperature if temperature is not None else self.descriptor.temperature
        max_tok = max_tokens if max_tokens is not None else self.descriptor.max_output_tokens

        kwargs: dict[str, Any] = {
            "model": self.descriptor.name,
            "messages": self._to_anthropic_messages(messages),
            "system": self.prompt_builder.build_system_blocks(context),
            "temperature": temp,
            "max_tokens": max_tok,
        }

        response = self.client.messages.create(**kwargs)

        text = "".join(block.text for block in response.content if block.type == "text")

        # Check if response was truncated due to max_tokens
        was_truncated = response.stop_reason == "max_tokens"
        if was_truncated:
            console.print("[yellow]Response was truncated - hit max_tokens limit[/yellow]")

        usage = None
        if getattr(response, "usage", None) is not None:
            usage = {
                "input_tokens": response.usage.input_tokens,
                "output_tokens": response.usage.output_tokens,
            }

        return ModelReply(text=text, was_truncated=was_truncated, usage=usage)

    def __call__(self, messages: list[dict[str, Any]], context: Optional[dict] = None) -> ModelReply:
        return self.complete(messages, context)

    def _to_anthropic_messages(self, messages: list[dict[str, Any]]) -> list[dict[str, str]]:
        """Convert history to Anthropic format.

        Agent turns become assistant turns, consecutive turns of the same role
        are merged and leading assistant turns are dropped, since the API
        requires alternating roles starting with the user.
        """
        converted: list[dict[str, str]] = []
        for m in messages:
            role = "assistant" if m["role"] in ("agent", "assistant") else "user"
            content = m.get("content") or ""
            if not converted and role == "assistant":
                continue
            if converted and converted[-1]["role"] == role:
                converted[-1]["content"] += "\n\n" + content
            else:
                converted.append({"role": role, "content": content})
        return converted

    @classmethod
    def parse_model_string(cls, model_str: str) -> ModelDescriptor:
        """Parse model string into ModelDescriptor.

        Args:
            model_str: Model string (e.g., "anthropic:claude-sonnet-4-5")

        Returns:
            ModelDescriptor

        Raises:
            ValueError: If model string is invalid
        """
        if model_str not in SUPPORTED_MODELS:
            raise ValueError(
                f"Unsupported model: {model_str}. "
                f"Supported: {', '.join(SUPPORTED_MODELS.keys())}"
            )

        model_config = SUPPORTED_MODELS[model_str]
        return ModelDescriptor(
            provider=model_config["provider"],
            name=model_config["name"],
            max_output_tokens=model_config["max_output_tokens"],
        )

    @classmethod
    def list_models(cls) -> list[str]:
        """List all supported model strings.

        Returns:
            List of model strings
        """
        return list(SUPPORTED_MODELS.keys())
