class NonogramError(ValueError):
    """Base error for invalid puzzle inputs."""


class InvalidDimensions(NonogramError):
    pass


class DegenerateImage(NonogramError):
    pass


class MalformedGrid(NonogramError):
    pass
