"""Command workflow for the playground, orchestrated with LangGraph."""

from langgraph.graph import END, StateGraph

from gitplayground.models.state import CommandState
from gitplayground.nodes.interpreter_node import interpreter_node, route_after_shell, shell_node
from gitplayground.nodes.progress_node import guided_node, objectives_node


def create_command_workflow():
    """Create the compiled graph a single command passes through."""
    workflow = StateGraph(CommandState)

    # Add nodes
    workflow.add_node("shell_node", shell_node)
    workflow.add_node("interpreter_node", interpreter_node)
    workflow.add_node("objectives_node", objectives_node)
    workflow.add_node("guided_node", guided_node)

    workflow.set_entry_point("shell_node")

    # Define edges
    workflow.add_conditional_edges(
        "shell_node",
        route_after_shell,
        {"interpret": "interpreter_node", "evaluate": "objectives_node"},
    )
    workflow.add_edge("interpreter_node", "objectives_node")
    workflow.add_edge("objectives_node", "guided_node")
    workflow.add_edge("guided_node", END)

    return workflow.compile()
