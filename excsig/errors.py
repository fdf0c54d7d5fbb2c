# excsig/errors.py


class ExcSigError(Exception):
    """Base class for every error raised by excsig."""
    pass


class NullArgumentError(ExcSigError, ValueError):
    """A required input was None."""

    def __init__(self, param_name: str):
        self.param_name = param_name
        super().__init__(f"Value cannot be None. (Parameter '{param_name}')")


class DisposedStateError(ExcSigError, RuntimeError):
    """An operation was attempted on an object that has already been torn down."""

    def __init__(self, object_name: str):
        self.object_name = object_name
        super().__init__(f"Cannot access a disposed object. (Object name: '{object_name}')")


class ExcSigConfigError(ExcSigError):
    """Configuration could not be loaded or saved."""
    pass
