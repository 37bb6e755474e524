"""LangGraph pipeline for a live agent turn."""

from typing import Callable

from langgraph.graph import END, StateGraph

from dbchat.interpreter import InterpretedResponse, interpret
from dbchat.llm import ModelReply
from dbchat.state import AgentTurnState

# Model-call boundary: (history, context) -> raw completion
ModelCall = Callable[[list[dict], dict], ModelReply]


class AgentTurnGraph:
    """Runs ``call_model -> interpret`` for one live turn.

    Exceptions raised by the model call propagate to the caller, which is
    expected to turn them into an error turn.
    """

    def __init__(self, model_call: ModelCall):
        """Initialize the graph.

        Args:
            model_call: Callable producing a ModelReply (e.g. ``LLM.complete``)
        """
        self.model_call = model_call
        self.graph = self.build_graph()

    def build_graph(self):
        """Build the LangGraph workflow.

        Returns:
            Compiled StateGraph
        """
        workflow = StateGraph(AgentTurnState)

        workflow.add_node("call_model", self.call_model_node)
        workflow.add_node("interpret", self.interpret_node)

        workflow.set_entry_point("call_model")
        workflow.add_edge("call_model", "interpret")
        workflow.add_edge("interpret", END)

        return workflow.compile()

    def call_model_node(self, state: AgentTurnState) -> dict:
        """Call the model with the conversation history."""
        reply = self.model_call(state["messages"], state.get("context") or {})
        return {"raw_text": reply.text, "was_truncated": reply.was_truncated}

    def interpret_node(self, state: AgentTurnState) -> dict:
        """Interpret the raw completion."""
        return {
            "response": interpret(state.get("raw_text", ""), state.get("was_truncated", False))
        }

    def run(self, messages: list[dict], context: dict) -> InterpretedResponse:
        """Run one live turn.

        Args:
            messages: Conversation history in model-boundary form
            context: Context blob for the system prompt

        Returns:
            InterpretedResponse
        """
        result = self.graph.invoke({"messages": messages, "context": context})
        return result["response"]

    __call__ = run
