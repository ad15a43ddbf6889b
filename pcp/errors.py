# pcp/errors.py

class PcpError(RuntimeError):
    """Base class for invariant violations inside the pursuit core."""

class EmptyClusterError(PcpError):
    """A nearest-node query hit a component with no members."""

class NoTargetError(PcpError):
    """No cluster scored above zero while collectibles remain."""
