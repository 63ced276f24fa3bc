"""Resolution of the account the collector runs in."""

import logging

from ..clients.aws_client import AWSAPIError, StsClient

logger = logging.getLogger(__name__)


class IdentityService:
    """Looks up the account id of the ambient credentials via STS."""

    def __init__(self, sts_client: StsClient):
        self.sts_client = sts_client

    async def get_account_id(self) -> str:
        """
        Return the account id of the credentials the process runs under.

        Called once per invocation. Failures are not retried here and
        propagate to the caller, which treats them as fatal.

        Raises:
            AWSAPIError: If the identity lookup fails or returns no account
        """
        try:
            response = await self.sts_client.get_caller_identity()
        except AWSAPIError as e:
            logger.error(f"Error getting current account ID: {e}")
            raise

        account_id = response.get("Account")
        if not account_id:
            logger.error("GetCallerIdentity returned no account ID")
            raise AWSAPIError("GetCallerIdentity returned no account ID")
        return account_id
