"""
evotree/errors.py - Error taxonomy for tree generation and genetic operators
"""


class EvoTreeError(Exception):
    """Base class for all evotree errors"""


class ContractViolationError(EvoTreeError):
    """A node type broke the Node contract (e.g. children disagree with child_count)"""


class ConfigurationError(EvoTreeError, ValueError):
    """Degenerate configuration or an attempt to pick from an empty range"""


class UnsupportedOperationError(EvoTreeError, NotImplementedError):
    """Operator variant that is declared but has no implementation"""
