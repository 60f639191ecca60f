from .callback_queue import SerialCallbackQueue

__all__ = ["SerialCallbackQueue"]
