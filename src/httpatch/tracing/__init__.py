from ._traced import record_status, traced_send

__all__ = ["record_status", "traced_send"]
