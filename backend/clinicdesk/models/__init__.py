from clinicdesk.models.state_entry import StateEntry

__all__ = ["StateEntry"]
