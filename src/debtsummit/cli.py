"""Command line interface for DebtSummit."""

from __future__ import annotations

from pathlib import Path

import click

from .charts import payoff_chart_png
from .config import BaseConfig
from .logging_config import setup_logging
from .models import Debt, PayoffPlan, Strategy
from .services.advice import AdviceService, debt_to_income_ratio
from .services.debts import compare_strategies, plan_payoff, prioritize
from .services.export_csv import export_schedule_csv, write_template_csv
from .services.import_csv import import_debts_csv
from .services.reports import format_currency

STRATEGY_CHOICE = click.Choice([s.value for s in Strategy], case_sensitive=False)


def _load_debts(csv_path: Path) -> list[Debt]:
    result = import_debts_csv(csv_path)
    for error in result.errors:
        click.echo(f"warning: {error}", err=True)
    if not result.debts:
        raise click.ClickException(f"No usable debts found in {csv_path}.")
    return result.debts


def _plan_options(config: BaseConfig, max_months: int | None) -> dict:
    return {
        "max_months": max_months or config.MAX_MONTHS,
        "baseline_max_months": config.BASELINE_MAX_MONTHS,
        "epsilon": config.BALANCE_EPSILON,
    }


def _echo_plan(plan: PayoffPlan) -> None:
    click.echo(f"Strategy:          {plan.strategy.label}")
    click.echo(f"Months to freedom: {plan.months}")
    click.echo(f"Estimated payoff:  {plan.payoff_date or 'N/A'}")
    click.echo(f"Total paid:        {format_currency(plan.total_paid)}")
    click.echo(f"Total interest:    {format_currency(plan.total_interest)}")
    click.echo(f"Interest avoided:  {format_currency(plan.interest_avoided)}")
    if not plan.paid_off:
        click.echo(
            f"Not paid off within {plan.months} months; "
            f"{format_currency(plan.final_balance)} would remain.",
            err=True,
        )


@click.group()
@click.option("--log/--no-log", "enable_log", default=False, help="Write structured logs to DATA_DIR/logs")
@click.pass_context
def main(ctx: click.Context, enable_log: bool) -> None:
    """Plan debt payoff with the snowball or avalanche strategy."""

    config = BaseConfig()
    if enable_log:
        setup_logging(config)
    ctx.obj = config


@main.command("plan")
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--strategy", type=STRATEGY_CHOICE, default=Strategy.SNOWBALL.value, show_default=True)
@click.option("--extra", type=click.FloatRange(min=0), default=100.0, show_default=True, help="Monthly extra payment")
@click.option("--windfall", type=click.FloatRange(min=0), default=0.0, help="One-time lump sum in month 1")
@click.option("--max-months", type=click.IntRange(min=1), default=None, help="Override the month cap")
@click.option("--schedule-out", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.option("--chart-out", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.pass_obj
def plan_command(
    config: BaseConfig,
    csv_path: Path,
    strategy: str,
    extra: float,
    windfall: float,
    max_months: int | None,
    schedule_out: Path | None,
    chart_out: Path | None,
) -> None:
    """Project the payoff schedule for the debts in CSV_PATH."""

    debts = _load_debts(csv_path)
    plan = plan_payoff(debts, strategy, extra, windfall, **_plan_options(config, max_months))
    _echo_plan(plan)

    if schedule_out is not None:
        path = export_schedule_csv(steps=plan.steps, output_path=schedule_out)
        click.echo(f"Schedule written: {path}")
    if chart_out is not None:
        path = payoff_chart_png(plan.steps, output_path=chart_out, sample_every=config.CHART_SAMPLE_EVERY)
        click.echo(f"Chart written: {path}")


@main.command("compare")
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--extra", type=click.FloatRange(min=0), default=100.0, show_default=True)
@click.option("--windfall", type=click.FloatRange(min=0), default=0.0)
@click.pass_obj
def compare_command(config: BaseConfig, csv_path: Path, extra: float, windfall: float) -> None:
    """Compare snowball and avalanche for the debts in CSV_PATH."""

    debts = _load_debts(csv_path)
    plans = compare_strategies(debts, extra, windfall, **_plan_options(config, None))
    click.echo(f"{'Strategy':<10} {'Months':>6} {'Payoff':>8} {'Interest':>14} {'Avoided':>14}")
    for plan in plans.values():
        click.echo(
            f"{plan.strategy.label:<10} {plan.months:>6} {plan.payoff_date or 'N/A':>8} "
            f"{format_currency(plan.total_interest):>14} {format_currency(plan.interest_avoided):>14}"
        )


@main.command("prioritize")
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--strategy", type=STRATEGY_CHOICE, default=Strategy.SNOWBALL.value, show_default=True)
def prioritize_command(csv_path: Path, strategy: str) -> None:
    """List debts in the order the strategy attacks them."""

    for index, debt in enumerate(prioritize(_load_debts(csv_path), strategy), start=1):
        tag = "Current Target" if index == 1 else f"Obstacle {index}"
        click.echo(
            f"{tag:<15} {debt.name:<24} {format_currency(debt.balance):>12} "
            f"{debt.interest_rate:>6.2f}% APR  min {format_currency(debt.minimum_payment)}/mo"
        )


@main.command("template")
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path), default=Path("debt_template.csv"))
def template_command(output: Path) -> None:
    """Write a starter CSV for bulk import."""

    click.echo(f"Template written: {write_template_csv(output)}")


@main.command("advice")
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--income", type=click.FloatRange(min=0), default=0.0, help="Monthly net income")
@click.option("--total-paid", type=click.FloatRange(min=0), default=0.0)
@click.pass_obj
def advice_command(config: BaseConfig, csv_path: Path, income: float, total_paid: float) -> None:
    """Ask the advice service for a pep talk about the debts in CSV_PATH."""

    debts = _load_debts(csv_path)
    ratio = debt_to_income_ratio(debts, income)
    message = AdviceService(model=config.ADVICE_MODEL).get_encouragement(
        debts, total_paid=total_paid, monthly_income=income
    )
    click.echo(f'"{message.pep_talk}"')
    click.echo(f"Next peak: {message.next_milestone}")
    click.echo(f"Pro tip:   {message.financial_tip}")
    if message.budget_advice:
        click.echo(f"Budget:    {message.budget_advice}")
    if message.health_score is not None:
        click.echo(f"Health score: {message.health_score}/100")
    click.echo(f"Debt-to-income: {'n/a' if ratio is None else f'{ratio * 100:.1f}%'}")


if __name__ == "__main__":  # pragma: no cover
    main()
