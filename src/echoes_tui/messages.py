from textual.message import Message


class ControllerChanged(Message):
    """The story controller's view or load state changed."""
