class ShopnetError(Exception):
    pass


class InvalidInput(ShopnetError):
    """Client-correctable input problem; the message is safe to return as-is."""

    def __init__(self, message, field=None):
        super().__init__(message)
        self.message = message
        self.field = field


class StoreFailure(ShopnetError):
    """The product store could not complete an operation."""
