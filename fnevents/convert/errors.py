class ConversionError(Exception):
    pass


class MissingField(ConversionError):
    def __init__(self, field: str):
        super().__init__(f"Missing required field: {field}")
        self.field = field


class UnresolvedType(ConversionError):
    pass


class UnresolvedService(ConversionError):
    pass


class MalformedInput(ConversionError):
    pass
