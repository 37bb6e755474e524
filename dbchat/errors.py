"""Exceptions raised by dbchat."""


class DbChatError(Exception):
    """Base class for dbchat errors."""


class AgentBusyError(DbChatError):
    """A submission arrived while an agent turn was still in flight."""


class UnknownDatasetError(DbChatError):
    """Requested dataset type is not registered."""

    def __init__(self, dataset_type: str):
        self.dataset_type = dataset_type
        super().__init__(f"Unknown dataset: {dataset_type}")
