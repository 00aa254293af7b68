"""
Validation layer for the search framework.
Fails fast on invalid configuration, before any iteration runs.
"""

from typing import Dict

from metaheur.core.exceptions import InvalidConfigurationError

SELECTORS = ('sequential', 'random', 'adaptive')
STRATEGIES = ('best', 'first', 'random')


def _check_positive_int(config: Dict, key: str, allow_none: bool = True):
    value = config.get(key)
    if value is None:
        if allow_none:
            return
        raise InvalidConfigurationError(parameter=key, value=None,
                                        expected="Required parameter")
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidConfigurationError(parameter=key, value=value,
                                        expected="integer >= 1")


def _check_positive_number(config: Dict, key: str, allow_none: bool = True):
    value = config.get(key)
    if value is None:
        if allow_none:
            return
        raise InvalidConfigurationError(parameter=key, value=None,
                                        expected="Required parameter")
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise InvalidConfigurationError(parameter=key, value=value,
                                        expected="> 0")


def _check_choice(config: Dict, key: str, choices):
    value = config.get(key)
    if value is not None and value not in choices:
        raise InvalidConfigurationError(parameter=key, value=value,
                                        expected=f"one of {list(choices)}")


class ConfigValidator:
    """Validate configuration parameters."""

    @staticmethod
    def validate_search_config(config: Dict) -> bool:
        """
        Validate the generic run configuration.

        Args:
            config: Run configuration dictionary

        Returns:
            True if valid

        Raises:
            InvalidConfigurationError: If configuration is invalid
        """
        _check_positive_int(config, 'max_iterations')
        _check_positive_number(config, 'max_time')
        _check_positive_int(config, 'stagnation_limit')

        log_interval = config.get('log_interval')
        if log_interval is not None and (not isinstance(log_interval, int) or log_interval < 0):
            raise InvalidConfigurationError(
                parameter='log_interval',
                value=log_interval,
                expected="integer >= 0"
            )

        seed = config.get('seed')
        if seed is not None and (not isinstance(seed, int) or seed < 0):
            raise InvalidConfigurationError(
                parameter='seed',
                value=seed,
                expected="non-negative integer"
            )

        return True

    @staticmethod
    def validate_vns_config(config: Dict, operator_count: int) -> bool:
        """
        Validate VNS configuration against the supplied operators.

        Raises:
            InvalidConfigurationError: If k_max is not positive or does not
                match the number of neighborhood operators
        """
        if operator_count < 1:
            raise InvalidConfigurationError(
                parameter='neighborhood_count',
                value=operator_count,
                expected=">= 1 neighborhood operator"
            )

        k_max = config.get('neighborhood_count')
        if k_max is not None:
            _check_positive_int(config, 'neighborhood_count')
            if k_max != operator_count:
                raise InvalidConfigurationError(
                    parameter='neighborhood_count',
                    value=k_max,
                    expected=f"number of operators ({operator_count})"
                )

        _check_choice(config, 'strategy', STRATEGIES)
        return True

    @staticmethod
    def validate_temperature_config(config: Dict) -> bool:
        """
        Validate cooling schedule parameters.

        Raises:
            InvalidConfigurationError: On non-positive temperatures, a cooling
                rate outside (0, 1) for geometric cooling or a non-positive
                decrement for linear cooling
        """
        _check_positive_number(config, 'initial_temperature', allow_none=False)
        _check_positive_number(config, 'min_temperature', allow_none=False)
        _check_positive_number(config, 'cooling_rate', allow_none=False)
        _check_choice(config, 'cooling', ('geometric', 'linear'))

        if config['min_temperature'] > config['initial_temperature']:
            raise InvalidConfigurationError(
                parameter='min_temperature',
                value=config['min_temperature'],
                expected=f"<= initial_temperature ({config['initial_temperature']})"
            )

        if config.get('cooling', 'geometric') == 'geometric' and not 0 < config['cooling_rate'] < 1:
            raise InvalidConfigurationError(
                parameter='cooling_rate',
                value=config['cooling_rate'],
                expected="(0, 1) for geometric cooling"
            )

        return True

    @staticmethod
    def validate_sa_config(config: Dict) -> bool:
        """Validate Simulated Annealing configuration."""
        ConfigValidator.validate_temperature_config(config)
        _check_choice(config, 'strategy', STRATEGIES)
        _check_choice(config, 'selector', SELECTORS)
        ConfigValidator._validate_decay(config)
        return True

    @staticmethod
    def validate_tabu_config(config: Dict) -> bool:
        """
        Validate Tabu Search configuration.

        Raises:
            InvalidConfigurationError: If the tenure or capacity is not a
                positive integer
        """
        _check_positive_int(config, 'tabu_tenure', allow_none=False)
        _check_positive_int(config, 'tabu_max_size')
        _check_choice(config, 'strategy', STRATEGIES)
        _check_choice(config, 'selector', SELECTORS)
        ConfigValidator._validate_decay(config)
        return True

    @staticmethod
    def validate_lns_config(config: Dict) -> bool:
        """Validate Large Neighborhood Search configuration."""
        _check_choice(config, 'acceptance', ('improving', 'threshold', 'annealing'))
        _check_choice(config, 'threshold_mode', ('relative', 'absolute'))
        _check_choice(config, 'destroy_selector', SELECTORS)
        _check_choice(config, 'repair_selector', SELECTORS)

        threshold = config.get('threshold')
        if config.get('acceptance') == 'threshold' and (threshold is None or threshold < 0):
            raise InvalidConfigurationError(
                parameter='threshold',
                value=threshold,
                expected=">= 0"
            )

        if config.get('acceptance') == 'annealing':
            ConfigValidator.validate_temperature_config(config)

        ConfigValidator._validate_decay(config)
        return True

    @staticmethod
    def _validate_decay(config: Dict):
        decay = config.get('adaptive_decay')
        if decay is not None and not 0 < decay <= 1:
            raise InvalidConfigurationError(
                parameter='adaptive_decay',
                value=decay,
                expected="(0, 1]"
            )
