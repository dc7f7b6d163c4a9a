"""Base service class for domain services."""


class Service:
    """Base class for domain services.

    Services own the comment rules that span the repository, the event
    notifier and the paginator.
    """

    pass
