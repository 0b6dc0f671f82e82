"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_positive_ints(section: str, params: dict[str, Any], names: tuple[str, ...]) -> list[ValidationError]:
    errors = []
    for name in names:
        if name in params:
            value = params[name]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field=f"{section}.{name}",
                    message="Must be a positive integer",
                    value=value
                ))
    return errors


class ConfigValidator:
    """Validates configuration parameters."""

    PERIOD_FIELDS = {
        "window": ("min_bars",),
        "rsi": ("period",),
        "macd": ("fast", "slow", "signal"),
        "ema": ("short", "medium", "long"),
        "bollinger": ("period",),
        "adx": ("period",),
        "atr": ("period",),
        "stochastic": ("k_period", "d_period"),
        "volatility": ("period",),
    }

    @staticmethod
    def validate_periods(config: dict[str, Any]) -> list[ValidationError]:
        """Validate indicator periods and their ordering."""
        errors = []

        for section, names in ConfigValidator.PERIOD_FIELDS.items():
            if section in config:
                errors.extend(_check_positive_ints(section, config[section], names))

        macd = config.get("macd", {})
        if _is_number(macd.get("fast")) and _is_number(macd.get("slow")) and macd["fast"] >= macd["slow"]:
            errors.append(ValidationError(
                field="macd.fast",
                message="Fast period must be shorter than slow period",
                value=macd["fast"]
            ))

        ema = config.get("ema", {})
        if all(_is_number(ema.get(k)) for k in ("short", "medium", "long")):
            if not ema["short"] < ema["medium"] < ema["long"]:
                errors.append(ValidationError(
                    field="ema",
                    message="Periods must satisfy short < medium < long",
                    value=(ema["short"], ema["medium"], ema["long"])
                ))

        bollinger = config.get("bollinger", {})
        if "std_mult" in bollinger:
            value = bollinger["std_mult"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="bollinger.std_mult",
                    message="Must be a positive number",
                    value=value
                ))

        volatility = config.get("volatility", {})
        if "annualization" in volatility:
            value = volatility["annualization"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="volatility.annualization",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_regime_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate regime thresholds."""
        errors = []

        for name in ("high_volatility", "low_volatility", "trend_adx"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value < 0:
                    errors.append(ValidationError(
                        field=f"regime.{name}",
                        message="Must be a non-negative number",
                        value=value
                    ))

        low = params.get("low_volatility")
        high = params.get("high_volatility")
        if _is_number(low) and _is_number(high) and low > high:
            errors.append(ValidationError(
                field="regime.low_volatility",
                message="Must not exceed high_volatility",
                value=low
            ))

        down = params.get("trend_down_rsi")
        up = params.get("trend_up_rsi")
        if _is_number(down) and _is_number(up) and not 0 <= down <= up <= 100:
            errors.append(ValidationError(
                field="regime.trend_down_rsi",
                message="Must satisfy 0 <= trend_down_rsi <= trend_up_rsi <= 100",
                value=(down, up)
            ))

        return errors

    @staticmethod
    def validate_scoring_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate scoring weights and the decision rule."""
        errors = []

        for name in ("rsi_extreme_points", "rsi_lean_points", "macd_points",
                     "ema_points", "di_points", "bollinger_points", "decision_margin"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value < 0:
                    errors.append(ValidationError(
                        field=f"scoring.{name}",
                        message="Must be a non-negative number",
                        value=value
                    ))

        oversold = params.get("rsi_oversold")
        midline = params.get("rsi_midline")
        overbought = params.get("rsi_overbought")
        if all(_is_number(v) for v in (oversold, midline, overbought)):
            if not 0 <= oversold <= midline <= overbought <= 100:
                errors.append(ValidationError(
                    field="scoring.rsi_oversold",
                    message="RSI zones must satisfy 0 <= oversold <= midline <= overbought <= 100",
                    value=(oversold, midline, overbought)
                ))

        low = params.get("percent_b_low")
        high = params.get("percent_b_high")
        if _is_number(low) and _is_number(high) and low > high:
            errors.append(ValidationError(
                field="scoring.percent_b_low",
                message="Must not exceed percent_b_high",
                value=low
            ))

        floor = params.get("confidence_floor")
        cap = params.get("confidence_cap")
        if _is_number(floor) and _is_number(cap):
            if not 0 <= floor <= cap <= 100:
                errors.append(ValidationError(
                    field="scoring.confidence_floor",
                    message="Confidence bounds must satisfy 0 <= floor <= cap <= 100",
                    value=(floor, cap)
                ))

        if "flat_tolerance" in params:
            value = params["flat_tolerance"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="scoring.flat_tolerance",
                    message="Must be a non-negative number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_sizing_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate ATR multiplier table and level factors."""
        errors = []

        multipliers = params.get("atr_multipliers", {})
        if not isinstance(multipliers, dict):
            errors.append(ValidationError(
                field="sizing.atr_multipliers",
                message="Must be a mapping of timeframe to multiplier",
                value=multipliers
            ))
        else:
            for timeframe, value in multipliers.items():
                if not _is_number(value) or value <= 0:
                    errors.append(ValidationError(
                        field=f"sizing.atr_multipliers.{timeframe}",
                        message="Must be a positive number",
                        value=value
                    ))

        for name in ("default_multiplier", "stop_factor", "take_profit_factor"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value <= 0:
                    errors.append(ValidationError(
                        field=f"sizing.{name}",
                        message="Must be a positive number",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_monte_carlo_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate simulation parameters."""
        errors = _check_positive_ints("monte_carlo", params, ("iterations", "min_iterations", "steps"))

        if "min_iterations" in params and isinstance(params["min_iterations"], int):
            if params["min_iterations"] < 100:
                errors.append(ValidationError(
                    field="monte_carlo.min_iterations",
                    message="Must be at least 100 for meaningful percentiles",
                    value=params["min_iterations"]
                ))

        if "var_percentile" in params:
            value = params["var_percentile"]
            if not _is_number(value) or not 0 < value < 1:
                errors.append(ValidationError(
                    field="monte_carlo.var_percentile",
                    message="Must be a number between 0 and 1",
                    value=value
                ))

        low = params.get("min_estimated_volatility")
        high = params.get("max_estimated_volatility")
        if low is not None and high is not None:
            if not (_is_number(low) and _is_number(high)) or not 0 < low <= high:
                errors.append(ValidationError(
                    field="monte_carlo.min_estimated_volatility",
                    message="Volatility clamp must satisfy 0 < min <= max",
                    value=(low, high)
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = ConfigValidator.validate_periods(config)

        if "regime" in config:
            errors.extend(ConfigValidator.validate_regime_params(config["regime"]))

        if "scoring" in config:
            errors.extend(ConfigValidator.validate_scoring_params(config["scoring"]))

        if "sizing" in config:
            errors.extend(ConfigValidator.validate_sizing_params(config["sizing"]))

        if "monte_carlo" in config:
            errors.extend(ConfigValidator.validate_monte_carlo_params(config["monte_carlo"]))

        return errors
