"""AWS client wrappers for API Gateway, API Gateway v2 and STS."""

import asyncio
import contextvars
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from typing import Any, Callable, Iterator

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

# Thread pool for blocking boto3 calls, installed per invocation by aws_executor()
_executor_context: contextvars.ContextVar[ThreadPoolExecutor | None] = contextvars.ContextVar(
    "aws_executor", default=None
)


class AWSAPIError(Exception):
    """Raised when AWS API calls fail."""
    pass


def default_boto_config(region: str) -> Config:
    """boto3 configuration applied to every client the collector creates."""
    return Config(
        region_name=region,
        retries={
            'max_attempts': 3,
            'mode': 'adaptive'
        }
    )


@contextmanager
def aws_executor(max_workers: int) -> Iterator[ThreadPoolExecutor]:
    """
    Install a thread pool for the boto3 calls made inside the block.

    The loop's default executor is sized from the CPU count (about six
    threads on a small Lambda), which would cap how many regions are in
    flight at once. The pool is sized by the caller to the fan-out instead
    and is shut down when the block exits.

    Args:
        max_workers: Number of boto3 calls that may block at the same time
    """
    executor = ThreadPoolExecutor(max_workers=max(1, max_workers), thread_name_prefix="aws")
    token = _executor_context.set(executor)
    try:
        yield executor
    finally:
        _executor_context.reset(token)
        executor.shutdown(wait=True)


async def run_blocking(func: Callable[..., Any], *args, **kwargs) -> Any:
    """
    Run ``func`` in the invocation's AWS thread pool.

    Falls back to the loop's default executor outside aws_executor().
    The caller's context (correlation ID included) is copied into the
    worker thread so log records written there keep it.
    """
    loop = asyncio.get_event_loop()
    context = contextvars.copy_context()
    return await loop.run_in_executor(
        _executor_context.get(),
        lambda: context.run(func, *args, **kwargs)
    )


async def call_aws(operation: str, func: Callable[..., Any], **kwargs) -> Any:
    """
    Run a blocking boto3 call off the event loop.

    There is no retry here beyond what the botocore config already does;
    callers decide whether a failure is fatal.

    Args:
        operation: Name used in error messages (e.g. "apigateway.get_rest_apis")
        func: Boto3 client method to call
        **kwargs: Keyword arguments for the method

    Returns:
        Response from AWS API

    Raises:
        AWSAPIError: If the call fails
    """
    try:
        return await run_blocking(func, **kwargs)

    except ClientError as e:
        error_code = e.response.get('Error', {}).get('Code', '')
        raise AWSAPIError(f"AWS API error in {operation}: {error_code} - {str(e)}") from e

    except BotoCoreError as e:
        raise AWSAPIError(f"Boto3 error in {operation}: {str(e)}") from e


class ApiGatewayClient:
    """
    Regional wrapper around the boto3 ``apigateway`` and ``apigatewayv2`` clients.

    Uses the ambient credentials of the process (Lambda execution role,
    instance profile or environment) - no hardcoded credentials.
    """

    def __init__(
        self,
        region: str,
        session: boto3.Session | None = None,
        boto_config: Config | None = None,
    ):
        """
        Initialize API Gateway clients for one region.

        Args:
            region: AWS region the clients talk to
            session: boto3 session to create clients from (default session if None)
            boto_config: Optional botocore Config, defaults to adaptive retries
        """
        config = boto_config or default_boto_config(region)
        factory = session.client if session is not None else boto3.client

        self.region = region
        self.apigateway = factory('apigateway', region_name=region, config=config)
        self.apigatewayv2 = factory('apigatewayv2', region_name=region, config=config)

    async def get_rest_apis(self, limit: int, position: str | None = None) -> dict[str, Any]:
        """
        Fetch one page of REST APIs.

        Args:
            limit: Page size
            position: Pagination cursor from the previous page

        Returns:
            Raw GetRestApis response (``items`` and optional ``position``)
        """
        kwargs: dict[str, Any] = {"limit": limit}
        if position:
            kwargs["position"] = position
        return await call_aws("apigateway.get_rest_apis", self.apigateway.get_rest_apis, **kwargs)

    async def get_rest_api_stages(self, rest_api_id: str) -> dict[str, Any]:
        """Fetch the stages of a REST API (``item`` list)."""
        return await call_aws(
            "apigateway.get_stages",
            self.apigateway.get_stages,
            restApiId=rest_api_id,
        )

    async def get_http_apis(self, max_results: int, next_token: str | None = None) -> dict[str, Any]:
        """
        Fetch one page of HTTP APIs.

        Args:
            max_results: Page size (the v2 API takes it as a string)
            next_token: Pagination cursor from the previous page

        Returns:
            Raw GetApis response (``Items`` and optional ``NextToken``)
        """
        kwargs: dict[str, Any] = {"MaxResults": str(max_results)}
        if next_token:
            kwargs["NextToken"] = next_token
        return await call_aws("apigatewayv2.get_apis", self.apigatewayv2.get_apis, **kwargs)

    async def get_http_api_stages(self, api_id: str) -> dict[str, Any]:
        """Fetch the stages of an HTTP API (``Items`` list)."""
        return await call_aws(
            "apigatewayv2.get_stages",
            self.apigatewayv2.get_stages,
            ApiId=api_id,
        )


class StsClient:
    """Wrapper around the boto3 STS client used for the identity lookup."""

    def __init__(
        self,
        region: str = "us-east-1",
        session: boto3.Session | None = None,
        boto_config: Config | None = None,
    ):
        config = boto_config or default_boto_config(region)
        factory = session.client if session is not None else boto3.client
        self.sts = factory('sts', region_name=region, config=config)

    async def get_caller_identity(self) -> dict[str, Any]:
        """Return the raw GetCallerIdentity response."""
        return await call_aws("sts.get_caller_identity", self.sts.get_caller_identity)
