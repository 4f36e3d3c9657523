import sys
import time
import logging
import datetime
import multiprocessing
from pathlib import Path
from typing import Dict, List, Optional

ERROR_LOG_NAME = "comparison_error.log"


class WarningCollector(logging.Handler):
    """Keeps the warnings and errors of one run for the closing summary."""

    def __init__(self):
        super().__init__(level=logging.WARNING)
        self.messages: List[str] = []

    def emit(self, record):
        self.messages.append(self.format(record))


def setup_logging(log_file: Path) -> WarningCollector:
    """
    Send run output to stdout and `log_file`, and warnings and errors to
    comparison_error.log beside it. Any handlers of a previous run are
    dropped. The returned collector is replayed by log_run_summary().
    """
    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.INFO)
    formatter = logging.Formatter('%(message)s')

    collector = WarningCollector()
    handlers = [
        (logging.StreamHandler(sys.stdout), logging.INFO),
        (logging.FileHandler(log_file), logging.INFO),
        (logging.FileHandler(log_file.with_name(ERROR_LOG_NAME)), logging.WARNING),
        (collector, logging.WARNING),
    ]
    for handler, level in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)
    return collector


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance"""
    return logging.getLogger(name)


def log_step(title: str, width: int = 100):
    text = f"[ {title} ]"
    side = (width - len(text)) // 2
    logging.getLogger().info("═" * side + text + "═" * (width - len(text) - side))


def log_progress(pbar, logger):
    """One closing line for a tqdm bar over chromosomes."""
    d = pbar.format_dict
    minutes, seconds = divmod(int(d["elapsed"]), 60)
    logger.info(f"{pbar.desc or 'Comparison'}: {d['n']}/{d['total']} {d['unit']}s done in {minutes}m {seconds}s")


def format_command(argv: Optional[List[str]] = None) -> str:
    """The invoked command line, one option and its value per line."""
    argv = list(sys.argv if argv is None else argv)
    words = argv[1:]
    head = [Path(argv[0]).name]
    if words and not words[0].startswith("-"):
        head.append(words.pop(0))

    lines = [" ".join(head)]
    while words:
        flag = words.pop(0)
        if words and not words[0].startswith("-"):
            flag = f"{flag} {words.pop(0)}"
        lines.append(f"  {flag}")
    return "\n".join(lines)


def log_worker_info(threads: int, chromosomes: int):
    """Log the worker count and warn about threads that can never be busy."""
    logger = logging.getLogger()
    try:
        cores = multiprocessing.cpu_count()
    except NotImplementedError:
        cores = None

    logger.info(f"Comparing {chromosomes} chromosomes on {threads} thread(s), "
                f"{cores or 'unknown'} logical cores detected")
    if threads > chromosomes:
        logger.warning(f"Only {chromosomes} chromosomes run at once; "
                       f"{threads - chromosomes} of {threads} threads will stay idle")
    if cores is not None and threads > cores:
        logger.warning(f"{threads} threads requested but only {cores} logical cores are available")


def log_run_summary(command: str, start: float, stats: Dict[str, str],
                    collector: Optional[WarningCollector] = None):
    """Command, timing, per-run statistics and every warning raised on the way."""
    logger = logging.getLogger()
    duration = time.time() - start
    hours, rest = divmod(int(duration), 3600)
    minutes, seconds = divmod(rest, 60)

    logger.info(f"Command:\n{command}")
    logger.info(f"{'Started:':<34}{datetime.datetime.fromtimestamp(start):%Y-%m-%d %H:%M:%S}")
    logger.info(f"{'Finished:':<34}{datetime.datetime.now():%Y-%m-%d %H:%M:%S}")
    logger.info(f"{'Runtime:':<34}{hours}:{minutes:02d}:{seconds:02d}")
    for key, value in stats.items():
        logger.info(f"{key + ':':<34}{value}")

    if collector is not None and collector.messages:
        logger.info("")
        logger.info(f"{len(collector.messages)} warning(s) and error(s):")
        for message in collector.messages:
            logger.info(f"  - {message}")
