class ConsistencyError(Exception):
    pass


class NotFoundError(ConsistencyError):
    pass


class ValidationError(ConsistencyError):
    pass
