import json
import logging
import os
import click
from budget_analyzer.config import load_config
from budget_analyzer.loaders import loader_for_path
from budget_analyzer.outputs import get_output
from budget_analyzer.pipeline import analyze_rows
from budget_analyzer.sample import write_sample_csv

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']


def _configure_logging(cli_level, cfg):
    level = (
        cli_level
        or os.getenv('BUDGETSENSE_LOG_LEVEL')
        or cfg.get('log_level')
        or 'WARNING'
    )
    logging.basicConfig(
        level=str(level).upper(),
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    )


def _echo_report(result):
    summary = result.metrics.summary
    click.echo(f"Transactions:   {summary.transaction_count}")
    click.echo(f"Total income:   ${summary.total_income:,.2f}")
    click.echo(f"Total expenses: ${summary.total_expenses:,.2f}")
    click.echo(f"Net savings:    ${summary.net_savings:,.2f}")
    click.echo(f"Savings rate:   {summary.savings_rate:.1f}%")
    click.echo(f"Budget health:  {result.metrics.budget_health_score}/100")

    click.echo("\nSpending by category:")
    for cat, bucket in sorted(
        result.metrics.category_breakdown.items(), key=lambda kv: kv[1].expenses, reverse=True
    ):
        if bucket.expenses:
            click.echo(f"  {cat:<16} ${bucket.expenses:,.2f} ({bucket.count})")

    click.echo("\n50/30/20 rule:")
    for entry in result.advice.budget_rule:
        click.echo(f"  {entry.name:<14} {entry.status:<8} ${entry.actual:,.2f} of ${entry.target:,.2f}")

    if result.metrics.recommendations:
        click.echo("\nRecommendations:")
        for rec in result.metrics.recommendations:
            click.echo(f"  [{rec.type}] {rec.title}: {rec.description}")

    click.echo("\nSuggestions:")
    for s in result.advice.suggestions:
        click.echo(f"  {s.title} (save ~${s.potential_savings:,.2f})")

    if result.advice.risk_areas:
        click.echo("\nRisk areas:")
        for r in result.advice.risk_areas:
            click.echo(f"  {r.title}")

    if result.advice.opportunities:
        click.echo("\nSavings opportunities:")
        for o in result.advice.opportunities:
            click.echo(f"  {o.title} (save ~${o.estimated_savings:,.2f})")

    if result.insights:
        click.echo("\nInsights:")
        for i in result.insights:
            click.echo(f"  {i.title}: {i.description}")

    if result.savings is not None:
        savings = result.savings
        click.echo("\nSavings analysis:")
        for c in savings.high_spending_categories:
            click.echo(f"  {c.category:<16} ${c.total:,.2f} over {c.count} transaction(s)")
        click.echo(
            f"  Potential savings: ${savings.potential_savings:,.2f} "
            f"of ${savings.total_expenses:,.2f} in expenses"
        )

    click.echo(f"\nDebt-to-income:  {result.debt_to_income_ratio:.1f}%")
    fund = result.emergency_fund
    click.echo(f"Emergency fund:  {fund.months_covered:.1f} month(s) covered ({fund.adequacy})")


@click.command()
@click.option(
    '--file', 'statement_file',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Statement file (CSV or Excel) with Date, Description and Amount columns.'
)
@click.option(
    '--output', 'output_format',
    default='csv',
    type=click.Choice(['csv', 'excel', 'none']),
    help='Where to write the categorized ledger: csv, excel, or none'
)
@click.option(
    '--config', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Path to config.yaml'
)
@click.option(
    '--log-level', 'log_level',
    default=None,
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help='Logging level (default: BUDGETSENSE_LOG_LEVEL or the config value)'
)
@click.option(
    '--json', 'as_json',
    is_flag=True,
    default=False,
    help='Print the full analysis as JSON instead of a text summary.'
)
@click.option(
    '--sample', 'sample_path',
    default=None,
    type=click.Path(dir_okay=False, writable=True),
    help='Write a sample statement CSV to this path and exit.'
)
def main(statement_file, output_format, config_path, log_level, as_json, sample_path):
    """
    Load a bank statement, normalize and categorize its transactions, and
    report budget metrics, 50/30/20 status, suggestions and savings
    opportunities. The categorized ledger is also written to CSV or Excel.
    Use --sample to get a template statement to start from.
    """
    if sample_path:
        write_sample_csv(sample_path)
        click.echo(f"Sample statement written to {sample_path}.")
        return
    if statement_file is None:
        raise click.UsageError("Missing option '--file'.")

    try:
        cfg = load_config(config_path)
    except (ValueError, OSError) as e:
        raise click.ClickException(f"Error loading config: {e}")
    _configure_logging(log_level, cfg)

    try:
        loader = loader_for_path(statement_file, cfg)
        rows = list(loader.load(statement_file))
        result = analyze_rows(rows, cfg)
    except (RuntimeError, ValueError) as e:
        raise click.ClickException(str(e))

    if not result.has_data:
        click.echo("No valid transactions found.")
        return

    if output_format != 'none':
        outputter = get_output(output_format, cfg)
        out_path = outputter.write(result)
        if not as_json:
            click.echo(f"Written {len(result.ledger)} transaction(s) to {out_path}.\n")

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _echo_report(result)
