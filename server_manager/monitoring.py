from typing import Callable, Iterable

from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily, Metric

from .managers.update_runner import UpdateRunner


class UpdateRunCollector:
    """
    Prometheus collector that reports update runner state on demand.
    """
    def __init__(self, runner_provider: Callable[[], UpdateRunner]):
        self.runner_provider = runner_provider

    def collect(self) -> Iterable[Metric]:
        """
        Collect update metrics.
        This is called by the Prometheus client on every scrape.
        """
        runner = self.runner_provider()

        in_progress = GaugeMetricFamily(
            "server_manager_update_in_progress",
            "1 while the update script is running"
        )
        in_progress.add_metric([], 1 if runner.in_progress else 0)
        yield in_progress

        # Exposed as server_manager_update_runs_total
        runs = CounterMetricFamily(
            "server_manager_update_runs",
            "Completed update runs by outcome",
            labels=["outcome"]
        )
        for outcome, count in sorted(runner.run_counts().items()):
            runs.add_metric([outcome], count)
        yield runs

        last_run = runner.last_run
        if last_run is not None and last_run.exit_code is not None:
            exit_code = GaugeMetricFamily(
                "server_manager_update_last_exit_code",
                "Exit code of the most recent update run"
            )
            exit_code.add_metric([], last_run.exit_code)
            yield exit_code
