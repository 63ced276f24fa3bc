"""API Gateway discovery collector.

Enumerates REST and HTTP APIs across regions of the invoking AWS account
and reports the inventory to the Treblle discovery endpoint.
"""

__version__ = "1.0.0"
