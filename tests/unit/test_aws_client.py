"""Unit tests for AWS client wrappers."""

import threading

import pytest
from unittest.mock import MagicMock
from moto import mock_aws
import boto3
from botocore.config import Config
from botocore.exceptions import ClientError, EndpointConnectionError

from apigw_discovery.clients import ApiGatewayClient, StsClient
from apigw_discovery.clients.aws_client import (
    AWSAPIError,
    aws_executor,
    call_aws,
    default_boto_config,
    run_blocking,
)
from apigw_discovery.utils.correlation import get_correlation_id, set_correlation_id


def _client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": "boom"}}, operation)


# =============================================================================
# Configuration
# =============================================================================

def test_default_boto_config_uses_adaptive_retries():
    """Test every client gets adaptive retries with three attempts."""
    config = default_boto_config("eu-west-1")

    assert config.region_name == "eu-west-1"
    assert config.retries == {"max_attempts": 3, "mode": "adaptive"}


def test_clients_bound_to_region(aws_credentials):
    """Test both API Gateway clients talk to the requested region."""
    client = ApiGatewayClient(region="ap-south-1")

    assert client.region == "ap-south-1"
    assert client.apigateway.meta.region_name == "ap-south-1"
    assert client.apigatewayv2.meta.region_name == "ap-south-1"


def test_clients_created_from_session():
    """Test clients are built from the given session and config."""
    session = MagicMock()
    config = Config(retries={"max_attempts": 1})

    ApiGatewayClient(region="us-west-2", session=session, boto_config=config)

    session.client.assert_any_call("apigateway", region_name="us-west-2", config=config)
    session.client.assert_any_call("apigatewayv2", region_name="us-west-2", config=config)


# =============================================================================
# call_aws error wrapping
# =============================================================================

@pytest.mark.asyncio
async def test_call_aws_returns_result():
    """Test the wrapped call's result is returned unchanged."""
    func = MagicMock(return_value={"ok": True})

    result = await call_aws("svc.op", func, Name="x")

    assert result == {"ok": True}
    func.assert_called_once_with(Name="x")


@pytest.mark.asyncio
async def test_call_aws_wraps_client_error():
    """Test ClientError is converted to AWSAPIError with the error code."""
    func = MagicMock(side_effect=_client_error("AccessDeniedException", "GetRestApis"))

    with pytest.raises(AWSAPIError, match="apigateway.get_rest_apis: AccessDeniedException"):
        await call_aws("apigateway.get_rest_apis", func)


@pytest.mark.asyncio
async def test_call_aws_wraps_botocore_error():
    """Test BotoCoreError is converted to AWSAPIError."""
    func = MagicMock(side_effect=EndpointConnectionError(endpoint_url="https://apigateway"))

    with pytest.raises(AWSAPIError, match="Boto3 error in sts.get_caller_identity"):
        await call_aws("sts.get_caller_identity", func)


# =============================================================================
# Worker threads
# =============================================================================

@pytest.mark.asyncio
async def test_call_aws_sees_correlation_id_in_worker_thread():
    """Test the caller's correlation ID is visible inside the boto3 call."""
    set_correlation_id("req-42")

    assert await call_aws("svc.op", get_correlation_id) == "req-42"


@pytest.mark.asyncio
async def test_call_aws_uses_invocation_executor():
    """Test calls made inside aws_executor run on its worker threads."""
    with aws_executor(max_workers=4) as executor:
        thread_name = await call_aws("svc.op", lambda: threading.current_thread().name)

    assert thread_name.startswith("aws")
    with pytest.raises(RuntimeError):
        executor.submit(print)


@pytest.mark.asyncio
async def test_run_blocking_passes_arguments():
    """Test positional and keyword arguments reach the blocking function."""
    func = MagicMock(return_value="client")

    assert await run_blocking(func, "eu-west-1", retries=2) == "client"
    func.assert_called_once_with("eu-west-1", retries=2)


# =============================================================================
# Request parameters
# =============================================================================

@pytest.mark.asyncio
async def test_get_rest_apis_omits_position_on_first_page():
    """Test the first page request carries only the limit."""
    client = ApiGatewayClient(region="us-east-1", session=MagicMock())
    client.apigateway.get_rest_apis.return_value = {"items": []}

    await client.get_rest_apis(limit=500)

    client.apigateway.get_rest_apis.assert_called_once_with(limit=500)


@pytest.mark.asyncio
async def test_get_rest_apis_passes_position():
    """Test the cursor is forwarded on later pages."""
    client = ApiGatewayClient(region="us-east-1", session=MagicMock())
    client.apigateway.get_rest_apis.return_value = {"items": []}

    await client.get_rest_apis(limit=500, position="cursor-1")

    client.apigateway.get_rest_apis.assert_called_once_with(limit=500, position="cursor-1")


@pytest.mark.asyncio
async def test_get_http_apis_sends_max_results_as_string():
    """Test MaxResults is sent as a string and NextToken forwarded."""
    client = ApiGatewayClient(region="us-east-1", session=MagicMock())
    client.apigatewayv2.get_apis.return_value = {"Items": []}

    await client.get_http_apis(max_results=500, next_token="tok")

    client.apigatewayv2.get_apis.assert_called_once_with(MaxResults="500", NextToken="tok")


# =============================================================================
# Against moto
# =============================================================================

@pytest.mark.asyncio
async def test_get_rest_apis_empty(aws_credentials):
    """Test listing REST APIs when none exist."""
    with mock_aws():
        client = ApiGatewayClient(region="us-east-1")
        response = await client.get_rest_apis(limit=500)

        assert response.get("items", []) == []


@pytest.mark.asyncio
async def test_get_rest_apis_lists_created_api(aws_credentials):
    """Test a created REST API is returned."""
    with mock_aws():
        apigw = boto3.client("apigateway", region_name="us-east-1")
        created = apigw.create_rest_api(name="orders-api")

        client = ApiGatewayClient(region="us-east-1")
        response = await client.get_rest_apis(limit=500)

        assert [(i["id"], i["name"]) for i in response["items"]] == [(created["id"], "orders-api")]


@pytest.mark.asyncio
async def test_get_http_apis_lists_created_api(aws_credentials):
    """Test a created HTTP API is returned."""
    with mock_aws():
        apigwv2 = boto3.client("apigatewayv2", region_name="eu-west-1")
        created = apigwv2.create_api(Name="payments-api", ProtocolType="HTTP")

        client = ApiGatewayClient(region="eu-west-1")
        response = await client.get_http_apis(max_results=500)

        assert [i["ApiId"] for i in response["Items"]] == [created["ApiId"]]


@pytest.mark.asyncio
async def test_get_rest_api_stages_unknown_api(aws_credentials):
    """Test stage lookup of an unknown REST API raises AWSAPIError."""
    with mock_aws():
        client = ApiGatewayClient(region="us-east-1")

        with pytest.raises(AWSAPIError):
            await client.get_rest_api_stages("doesnotexist")


@pytest.mark.asyncio
async def test_get_caller_identity(aws_credentials):
    """Test the STS wrapper returns the account of the credentials."""
    with mock_aws():
        expected = boto3.client("sts", region_name="us-east-1").get_caller_identity()["Account"]

        response = await StsClient(region="us-east-1").get_caller_identity()

        assert response["Account"] == expected
