"""
Plain-text formatting of ProPower results.

Internal utilities - not part of public API.
"""

from typing import Any, Dict, List, Optional


class _TableFormatter:
    """Fixed-width text table helpers."""

    def _create_table(
        self,
        headers: List[str],
        rows: List[List[str]],
        col_widths: Optional[List[int]] = None,
    ) -> str:
        """Render *headers* and *rows* as a left-aligned table with a dashed rule."""
        if col_widths is None:
            col_widths = [max([len(str(h))] + [len(str(r[i])) for r in rows]) for i, h in enumerate(headers)]

        def _line(cells):
            return " ".join(f"{str(c):<{w}}" for c, w in zip(cells, col_widths))

        lines = [_line(headers), "-" * (sum(col_widths) + len(col_widths) - 1)]
        lines.extend(_line(row) for row in rows)
        return "\n".join(lines)

    def _format_value(self, value: Any, fmt: Optional[str] = None) -> str:
        """Format floats to 4 decimals (6 for tiny values); other types via ``str``."""
        if isinstance(value, float):
            if fmt is not None:
                return format(value, fmt)
            if value != 0 and abs(value) < 0.001:
                return f"{value:.6f}"
            return f"{value:.4f}"
        return str(value)

    @staticmethod
    def _pct(value: Optional[float]) -> str:
        return "-" if value is None else f"{100 * value:.1f}%"


class _ResultFormatter(_TableFormatter):
    """Builds the printed report for each kind of result."""

    def format(self, kind: str, result: Dict[str, Any], summary: str = "short") -> str:
        formatters = {
            "sample_size": self._format_sample_size,
            "power": self._format_power,
            "power_curve": self._format_power_curve,
            "design": self._format_design,
        }
        if kind not in formatters:
            raise ValueError(f"Unknown result kind: {kind!r}. Valid options: {', '.join(formatters)}")
        if summary not in ("short", "long"):
            raise ValueError(f"summary must be 'short' or 'long', got {summary!r}")
        return formatters[kind](result["model"], result["results"], summary)

    def _header(self, model: Dict[str, Any]) -> List[str]:
        return [
            f"Reference proportion: {self._format_value(float(model['reference_proportion']))}",
            f"Alternative proportion: {self._format_value(float(model['alternative_proportion']))}"
            f" (delta = {model['delta']:+.4f})",
            f"Target power: {self._pct(model['target_power'])}, z_alpha = {model['z_alpha']:.4f}",
        ]

    def _format_sample_size(self, model, results, summary) -> str:
        lines = self._header(model)
        lines.append("")
        lines.append(f"Required sample size: {results['rounded_sample_size']}")
        if summary == "long":
            lines.append(f"Unrounded: {self._format_value(results['required_sample_size'])}")
            lines.append(f"z_beta: {self._format_value(float(results['z_beta']))}")

        simulation = results.get("simulation")
        if simulation:
            lines.append(
                f"Simulated power at N={results['rounded_sample_size']}: "
                f"{self._pct(simulation['simulated_power'])} "
                f"({simulation['n_rejections']}/{simulation['n_simulations_used']} surveys rejected)"
            )
        return "\n".join(lines)

    def _format_power(self, model, results, summary) -> str:
        lines = self._header(model)
        lines.append("")
        rows = [["Analytical", self._pct(results["analytical_power"])]]
        if results.get("simulated_power") is not None:
            rows.append(["Simulated", self._pct(results["simulated_power"])])
        lines.append(f"Sample size: {model['sample_size']}")
        lines.append(self._create_table(["Method", "Power"], rows))
        status = "reached" if results["target_achieved"] else "NOT reached"
        lines.append(f"\nTarget power {status}")
        if summary == "long" and results.get("simulation"):
            lines.append(f"Mean simulated estimate: {self._format_value(results['simulation']['mean_estimate'])}")
        return "\n".join(lines)

    def _format_power_curve(self, model, results, summary) -> str:
        lines = self._header(model)
        lines.append("")
        first = results["first_achieved"]
        lines.append(f"First sample size reaching target: {first if first != -1 else 'not reached in range'}")
        first_sim = results.get("first_achieved_simulated")
        if first_sim is not None:
            lines.append(f"First sample size reaching target (simulated): {first_sim if first_sim != -1 else 'not reached in range'}")

        if summary == "long":
            headers = ["N", "Analytical"]
            simulated = results.get("simulated_powers")
            if simulated is not None:
                headers.append("Simulated")
            rows = []
            for i, n in enumerate(results["sample_sizes_tested"]):
                row = [str(n), self._pct(results["analytical_powers"][i])]
                if simulated is not None:
                    row.append(self._pct(simulated[i]))
                rows.append(row)
            lines.append("")
            lines.append(self._create_table(headers, rows))
        return "\n".join(lines)

    def _format_design(self, model, results, summary) -> str:
        lines = self._header(model)
        lines.append(f"Sample size: {model['sample_size']}")
        lines.append("")
        rows = [
            ["Power", self._pct(results["power"])],
            ["Type S error", self._pct(results["type_s"])],
            ["Type M error (exaggeration)", f"{results['type_m']:.2f}x"],
        ]
        if summary == "long":
            rows.append(["Standard error", self._format_value(float(results["standard_error"]))])
        lines.append(self._create_table(["Quantity", "Value"], rows))
        return "\n".join(lines)


_result_formatter = _ResultFormatter()


def _format_results(kind: str, result: Dict[str, Any], summary: str = "short") -> str:
    """Format a result dict (``{"model": ..., "results": ...}``) as plain text.

    Args:
        kind: ``"sample_size"``, ``"power"``, ``"power_curve"`` or ``"design"``.
        result: Result dictionary from the model layer.
        summary: ``"short"`` or ``"long"``.
    """
    return _result_formatter.format(kind, result, summary)
