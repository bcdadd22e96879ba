from enum import Enum


class InvalidScenarioError(ValueError):
    """Raised when a scenario selector is not one of the known price scenarios."""


class PriceScenario(str, Enum):
    FIXED = "fixed"
    WINDY = "windy"
    SUNNY = "sunny"
    VOLATILE = "volatile"

    @classmethod
    def parse(cls, value):
        """
        Convert a selector (enum member or case-insensitive name) into a PriceScenario.

        Raises
        ------
        InvalidScenarioError
            If the value does not name a known scenario.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        options = ", ".join(s.value for s in cls)
        raise InvalidScenarioError(f"Unknown price scenario {value!r} (expected one of: {options})")

    @property
    def is_market_linked(self):
        return self is not PriceScenario.FIXED


class DemandMode(str, Enum):
    MANUAL = "manual"
    SMART = "smart"
