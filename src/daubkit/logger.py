"""Contains the name for the logger of daubkit modules.

``daubkit`` uses a simple logging system based on the
`Logging <https://docs.python.org/3/library/logging.html>`__ standard library.
Logging messages are grouped in different levels:

* ``INFO``: Progress of the experiment (grid construction, candidate timings).
* ``WARNING``: A candidate interpolant could not be built and was skipped.
* ``ERROR``: A convergence table could not be written.

By default, only messages of level ``WARNING`` are displayed.

The experiment results themselves (error tables and winners) are printed to
standard output and are not routed through the logger.

Calling applications can configure the format and log level of the displayed messages
by `Configuring Logging <https://docs.python.org/3/howto/logging.html#configuring-logging>`__
for ``daubkit.logger.daubkit_logger``, e.g.::

    >>> import logging
    >>> logging.basicConfig(
    ...     level=logging.INFO,
    ...     format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    ... )
"""
import logging

logger_name = "daubkit"
daubkit_logger = logging.getLogger(logger_name)
