"""Outbound query execution and response filtering."""

from fqdnproxy.proxy.executor import ProxyExecutor
from fqdnproxy.proxy.range_filter import filter_by_range

__all__ = ["ProxyExecutor", "filter_by_range"]
