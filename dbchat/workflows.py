"""Workflow configurations and demo scripts."""

from pydantic import BaseModel, Field

from dbchat.script import ScriptTable
from dbchat.state import Step, SuggestedAction


class WorkflowOption(BaseModel):
    """Choice offered in the entry view."""

    id: str
    title: str
    description: str = ""


class WorkflowConfig(BaseModel):
    """Static configuration of a workflow."""

    id: str
    title: str
    subtitle: str = ""
    options: list[WorkflowOption] = Field(default_factory=list)
    initial_prompts: list[SuggestedAction] = Field(default_factory=list)
    steps: list[Step] = Field(default_factory=list)
    placeholder: str = ""
    current_page: str = ""
    multi_select: bool = Field(
        False, description="Prompts toggle and need /confirm instead of submitting immediately"
    )


CREATE_DATABASE = WorkflowConfig(
    id="create-database",
    title="Create database",
    subtitle="Describe what you're building and we'll help you set up the optimal solution",
    options=[
        WorkflowOption(
            id="create-new",
            title="Create new",
            description=(
                "Create a brand new database. Describe your use case and we'll help "
                "you set up the optimal solution."
            ),
        ),
        WorkflowOption(
            id="create-existing",
            title="Create from existing",
            description=(
                "Tell us about your existing workload and we will build the right solution. "
                "We can duplicate existing resources, migrate from on prem, etc..."
            ),
        ),
    ],
    initial_prompts=[
        SuggestedAction(id="food-delivery", label="Food delivery application"),
        SuggestedAction(id="ecommerce", label="E-commerce platform"),
        SuggestedAction(id="iot", label="IoT sensor data"),
        SuggestedAction(id="saas", label="SaaS analytics"),
    ],
    steps=[Step(id="configure", title="Configure"), Step(id="build", title="Build")],
    placeholder=(
        "Describe what you are trying to build. A good description should include an "
        "application overview, data requirements, and key use cases."
    ),
    current_page="/create-database",
)

_RESOURCE_ID = "food-delivery-db-001"
_RESOURCE_NAME = "food-delivery-prod - us-east-1"
_RESOURCE_TYPE = "Aurora DSQL - PostgreSQL"

FOOD_DELIVERY_SCRIPT = [
    {
        "trigger": "initial",
        "agentResponse": {
            "type": "agent",
            "content": (
                "Great! A food delivery platform has some interesting data requirements. "
                "Based on your need for real-time order tracking, I'd recommend Aurora DSQL - "
                "it handles high write throughput for order updates while maintaining strong "
                "consistency for payments.\n\n"
                "Quick question: How many restaurants are you planning to support initially?"
            ),
        },
        "nextPrompts": [
            {"id": "under-50", "text": "Under 50 restaurants"},
            {"id": "50-200", "text": "50-200 restaurants"},
            {"id": "200-plus", "text": "200+ restaurants"},
        ],
        "delay": 1500,
    },
    {
        "trigger": "prompt-selection",
        "agentResponse": {
            "type": "agent",
            "content": (
                "Perfect! For your scale, I recommend starting with a single-region setup in "
                "us-east-1. You can easily expand to multi-region later as you grow.\n\n"
                "One more thing - do you need separate environments for development and testing?"
            ),
        },
        "nextPrompts": [
            {"id": "dev-prod", "text": "Yes, create dev + prod"},
            {"id": "prod-only", "text": "Just production for now"},
        ],
        "delay": 1200,
    },
    {
        "trigger": "prompt-selection",
        "agentResponse": {
            "type": "agent",
            "content": (
                "Here's what I'll set up for you:\n\n"
                "• Aurora DSQL cluster (us-east-1)\n"
                "• Production environment\n"
                "• Optimized for high-frequency order updates\n"
                "• Auto-scaling enabled\n"
                "• Connection pooling configured\n\n"
                "Ready to build?"
            ),
            "isConfirmation": True,
            "actions": [
                {"id": "auto-setup", "label": "Auto DB setup", "variant": "primary"},
                {"id": "configure-manual", "label": "Configure together"},
            ],
        },
        "nextPrompts": [],
        "delay": 1500,
    },
    {
        "trigger": "action",
        "triggerValue": "auto-setup",
        "agentResponse": {
            "type": "agent",
            "content": (
                "Starting automated setup. I'll configure everything and keep you "
                "updated on the progress."
            ),
        },
        "transitionToView": "split",
        "updateStep": {"stepId": "configure", "status": "in-progress"},
        "delay": 800,
    },
    {
        "trigger": "action",
        "triggerValue": "setup-progress-1",
        "agentResponse": {
            "type": "agent",
            "content": (
                "Setting up your Aurora DSQL cluster...\n\n"
                "✓ Creating cluster configuration\n"
                "✓ Configuring security groups\n"
                "• Provisioning database instance..."
            ),
        },
        "createResource": {
            "id": _RESOURCE_ID,
            "name": _RESOURCE_NAME,
            "type": _RESOURCE_TYPE,
            "region": "us-east-1",
            "status": "creating",
        },
        "delay": 2000,
    },
    {
        "trigger": "action",
        "triggerValue": "setup-progress-2",
        "agentResponse": {
            "type": "agent",
            "content": (
                "Configuration complete! Now starting the build process.\n\n"
                "Do you need the database to serve traffic across multiple regions? I can set "
                "up multi-region replication if you expect customers in different geographic "
                "areas."
            ),
        },
        "updateStep": {"stepId": "configure", "status": "success"},
        "nextPrompts": [
            {"id": "multi-region-yes", "text": "Yes, enable multi-region"},
            {"id": "multi-region-no", "text": "No, single region is fine"},
        ],
        "delay": 2500,
    },
    {
        "trigger": "prompt-selection",
        "agentResponse": {
            "type": "agent",
            "content": (
                "Got it! I'll finalize the single-region setup. "
                "Starting the build process now..."
            ),
        },
        "updateStep": {"stepId": "build", "status": "in-progress"},
        "nextPrompts": [],
        "delay": 1000,
    },
    {
        "trigger": "action",
        "triggerValue": "build-progress-1",
        "agentResponse": {
            "type": "agent",
            "content": (
                "Build in progress...\n\n"
                "✓ Database instance provisioned\n"
                "✓ Network configuration applied\n"
                "✓ IAM roles created\n"
                "• Generating connection endpoints..."
            ),
        },
        "delay": 2000,
    },
    {
        "trigger": "action",
        "triggerValue": "build-complete",
        "agentResponse": {
            "type": "status",
            "content": (
                "Everything is configured. Once you click complete, I'll finalize the "
                "remaining resources and generate your connection details."
            ),
            "actions": [
                {"id": "complete-setup", "label": "Complete DB setup", "variant": "primary"},
            ],
        },
        "delay": 2000,
    },
    {
        "trigger": "action",
        "triggerValue": "complete-setup",
        "agentResponse": {
            "type": "agent",
            "content": "Your food delivery database is ready! Here's what I set up:",
        },
        "updateStep": {"stepId": "build", "status": "success"},
        "createResource": {
            "id": _RESOURCE_ID,
            "name": _RESOURCE_NAME,
            "type": _RESOURCE_TYPE,
            "region": "us-east-1",
            "status": "active",
            "endpoint": "food-delivery-xyz.dsql.us-east-1.on.aws",
            "details": {
                "Cluster ID": "food-delivery-prod-xyz",
                "Engine": "Aurora DSQL",
                "Auto-scaling": "Enabled",
            },
        },
        "transitionToView": "completion",
        "delay": 1500,
    },
    {
        "trigger": "action",
        "triggerValue": "show-next-steps",
        "agentResponse": {"type": "agent", "content": "What would you like to do next?"},
        "nextPrompts": [
            {"id": "connect", "text": "Connect to my cluster"},
            {"id": "import", "text": "Import sample data"},
            {"id": "schema", "text": "View schema"},
        ],
        "delay": 800,
    },
]


def food_delivery_script() -> ScriptTable:
    """Transition table for the food delivery demo conversation."""
    return ScriptTable.from_dicts(FOOD_DELIVERY_SCRIPT)
