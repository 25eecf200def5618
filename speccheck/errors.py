class ConstructionError(Exception):
    """ a requested point / scalar class can not be produced, aborts vector generation """


class EncodingError(Exception):
    """ a point or scalar can not be serialized to its byte form, aborts vector generation """


class BackendError(Exception):
    """ a verifier faulted or timed out on a single (backend, vector) cell """

    def __init__(self, backend: str, index: int, reason: str):
        super().__init__(f"backend {backend!r} failed on vector {index}: {reason}")
        self.backend = backend
        self.index = index
        self.reason = reason


class FormatError(Exception):
    """ the report could not be rendered from the compliance matrix """
