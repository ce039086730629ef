class CayleyError(ValueError):
    """base class for every failure raised by cayley_groups"""


class ValidationError(CayleyError):
    """malformed table: bad elements, non-square matrix, foreign cell values"""


class AxiomError(CayleyError):
    """table does not satisfy a group axiom. `axiom` names the failed check"""

    def __init__(self, axiom: str, message: str):
        super().__init__(message)
        self.axiom = axiom


class UnknownElementError(CayleyError, KeyError):
    """a query was given a value outside the element set"""

    def __init__(self, element, message: str | None = None):
        super().__init__(message or f"unknown element: {element!r}")
        self.element = element

    def __str__(self):
        # KeyError would otherwise repr() the message
        return self.args[0]


class ClosureError(CayleyError):
    """candidate subgroup is not closed under the supergroup operation"""

    def __init__(self, pair, product):
        a, b = pair
        super().__init__(
            f"subset is not closed under multiplication: {a!r} * {b!r} = {product!r}"
        )
        self.pair = pair
        self.product = product
