"""
Temperature schedules for Simulated Annealing acceptance.

A schedule holds the current temperature and a cooling rule. The temperature
never drops below a positive floor: cooling that would cross it is clamped,
so the acceptance probability exp(-delta / T) stays defined.
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict

from metaheur.core.exceptions import InvalidConfigurationError


class TemperatureSchedule(ABC):
    """Base class for cooling schedules."""

    def __init__(self, initial_temperature: float, min_temperature: float = 1e-6):
        """
        Initialize schedule.

        Args:
            initial_temperature: Starting temperature (> 0)
            min_temperature: Floor the temperature is clamped to (> 0)

        Raises:
            InvalidConfigurationError: On non-positive temperatures or a floor
                above the initial temperature
        """
        if initial_temperature is None or initial_temperature <= 0:
            raise InvalidConfigurationError(
                parameter='initial_temperature',
                value=initial_temperature,
                expected="> 0"
            )
        if min_temperature is None or min_temperature <= 0:
            raise InvalidConfigurationError(
                parameter='min_temperature',
                value=min_temperature,
                expected="> 0"
            )
        if min_temperature > initial_temperature:
            raise InvalidConfigurationError(
                parameter='min_temperature',
                value=min_temperature,
                expected=f"<= initial_temperature ({initial_temperature})"
            )

        self.initial_temperature = float(initial_temperature)
        self.min_temperature = float(min_temperature)
        self.reset()

    def reset(self):
        """Restore the initial temperature."""
        self._temperature = self.initial_temperature
        self.steps = 0

    def current(self) -> float:
        return self._temperature

    def advance(self) -> float:
        """Cool one step and return the new temperature."""
        self.steps += 1
        cooled = self._cool(self._temperature, self.steps)
        self._temperature = max(self.min_temperature, cooled)
        return self._temperature

    @property
    def at_floor(self) -> bool:
        return self._temperature <= self.min_temperature

    @abstractmethod
    def _cool(self, temperature: float, step: int) -> float:
        pass

    def to_dict(self) -> Dict:
        return {
            'schedule': type(self).__name__,
            'temperature': self._temperature,
            'steps': self.steps,
        }


class GeometricSchedule(TemperatureSchedule):
    """T <- T * alpha, with 0 < alpha < 1."""

    def __init__(self, initial_temperature: float, alpha: float = 0.95,
                 min_temperature: float = 1e-6):
        if alpha is None or not 0 < alpha < 1:
            raise InvalidConfigurationError(
                parameter='cooling_rate',
                value=alpha,
                expected="(0, 1)"
            )
        self.alpha = float(alpha)
        super().__init__(initial_temperature, min_temperature)

    def _cool(self, temperature, step):
        return temperature * self.alpha


class LinearSchedule(TemperatureSchedule):
    """T <- T - delta, with delta > 0."""

    def __init__(self, initial_temperature: float, delta: float = 1.0,
                 min_temperature: float = 1e-6):
        if delta is None or delta <= 0:
            raise InvalidConfigurationError(
                parameter='cooling_rate',
                value=delta,
                expected="> 0"
            )
        self.delta = float(delta)
        super().__init__(initial_temperature, min_temperature)

    def _cool(self, temperature, step):
        return temperature - self.delta


class CustomSchedule(TemperatureSchedule):
    """T <- rule(T, step) for a user-supplied rule."""

    def __init__(self, initial_temperature: float,
                 rule: Callable[[float, int], float],
                 min_temperature: float = 1e-6):
        if not callable(rule):
            raise InvalidConfigurationError(
                parameter='rule',
                value=rule,
                expected="callable (temperature, step) -> temperature"
            )
        self.rule = rule
        super().__init__(initial_temperature, min_temperature)

    def _cool(self, temperature, step):
        return self.rule(temperature, step)


def create_schedule(config: Dict) -> TemperatureSchedule:
    """
    Build a schedule from a config dict.

    Args:
        config: Dict with initial_temperature, cooling, cooling_rate and
            min_temperature

    Returns:
        Configured schedule
    """
    cooling = config.get('cooling', 'geometric')
    initial = config.get('initial_temperature')
    floor = config.get('min_temperature', 1e-6)

    if cooling == 'geometric':
        return GeometricSchedule(initial, alpha=config.get('cooling_rate'), min_temperature=floor)
    if cooling == 'linear':
        return LinearSchedule(initial, delta=config.get('cooling_rate'), min_temperature=floor)

    raise InvalidConfigurationError(
        parameter='cooling',
        value=cooling,
        expected="geometric or linear"
    )
