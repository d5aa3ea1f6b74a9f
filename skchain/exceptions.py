class TopologyMismatchError(ValueError):
    """A joint path does not fit the topology it is used with.

    Raised when a path joint index is out of range or when a path joint
    has a different dof than the one the path was built with.
    """


class ConfigurationMismatchError(TopologyMismatchError):
    """Configuration lists do not match the topology element counts."""
