"""Exceptions raised by the recommendation core."""


class RecommendationError(Exception):
    """Base class for everything `RecommendationEngine` raises."""


class NotFoundError(RecommendationError):
    """The user (or their profile) could not be located."""


class UpstreamReadError(RecommendationError):
    """A catalog, profile or meal-log read failed; nothing is retried."""
