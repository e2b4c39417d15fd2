"""Change notifications delivered to GraphQL subscriptions."""

from .publisher import PERSON_ADDED, ChangeNotifier

__all__ = ["PERSON_ADDED", "ChangeNotifier"]
