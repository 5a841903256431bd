"""
Calculator registry keyed by ``(quote_type, scope_id)``.

Calculator modules register themselves at import time:

    @register_calculator("onderhoud", "heggen", HeggenOnderhoudData)
    def calculate_heggen_onderhoud(data, ctx): ...

The dispatcher looks calculators up here instead of switching on scope ids,
so a new scope only needs a model and a decorated function.
"""
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple, Type

from hovenier.models.quote import CalculationContext, LineItem
from hovenier.models.scope_data import ScopeData

CalculatorFn = Callable[[Any, CalculationContext], List[LineItem]]


class RegisteredCalculator(NamedTuple):
    quote_type: str
    scope_id: str
    model: Type[ScopeData]
    calculate: CalculatorFn

    def parse(self, data: Any) -> ScopeData:
        """Accept an instance of the scope model or a raw mapping; raises ValidationError."""
        if isinstance(data, self.model):
            return data
        if isinstance(data, ScopeData):
            data = data.model_dump()
        return self.model.model_validate(data)


_REGISTRY: Dict[Tuple[str, str], RegisteredCalculator] = {}


def register_calculator(quote_type: str, scope_id: str, model: Type[ScopeData]):
    def decorator(fn: CalculatorFn) -> CalculatorFn:
        _REGISTRY[(quote_type, scope_id)] = RegisteredCalculator(quote_type, scope_id, model, fn)
        return fn
    return decorator


def get_calculator(quote_type: str, scope_id: str) -> Optional[RegisteredCalculator]:
    return _REGISTRY.get((quote_type, scope_id))


def registered_scopes() -> List[Tuple[str, str]]:
    return sorted(_REGISTRY)
