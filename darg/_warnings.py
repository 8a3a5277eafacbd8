"""Custom warning category for darg."""


class DargWarning(UserWarning):
    """Warning category for darg-specific warnings, emitted when a declaration is
    legal but likely to behave surprisingly.

    This can be used to filter darg warnings:
    >>> import warnings
    >>> warnings.filterwarnings("ignore", category=DargWarning)
    """

    pass
