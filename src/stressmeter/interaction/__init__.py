from .interactable import Interactable

__all__ = ["Interactable"]
