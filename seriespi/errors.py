class SeriesPiError(Exception):
    pass


class InvalidPrecision(SeriesPiError, ValueError):
    pass


class CacheIndexOutOfRange(SeriesPiError, IndexError):
    def __init__(self, index: int, max_index: int):
        super().__init__(f"factorial index {index} outside cache bound [0, {max_index}]")
        self.index = index
        self.max_index = max_index


class WorkerFailure(SeriesPiError, RuntimeError):
    def __init__(self, worker: int, cause: BaseException):
        super().__init__(f"worker {worker} failed: {cause!r}")
        self.worker = worker
        self.cause = cause
