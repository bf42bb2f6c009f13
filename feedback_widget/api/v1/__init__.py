from feedback_widget.api.v1 import feedback

__all__ = ["feedback"]
