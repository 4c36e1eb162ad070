"""Event bus adapter backed by AWS SNS topics."""

import logging
from typing import Optional

import boto3
from botocore.exceptions import ClientError

from common.config import get_settings

logger = logging.getLogger(__name__)


class TopicUnavailableError(RuntimeError):
    """Raised when a publish destination could not be resolved or created."""


def get_sns_client():
    """Create SNS client."""
    return boto3.client("sns", region_name=get_settings().aws_region)


def _is_already_exists(err: ClientError) -> bool:
    error = err.response.get("Error", {})
    code = error.get("Code", "")
    message = error.get("Message", "").lower()
    return code in ("TopicAlreadyExists", "AlreadyExists") or (
        code == "InvalidParameter" and "already exists" in message
    )


class EventBus:
    """Publishes JSON payloads to named topics, creating topics on demand."""

    def __init__(self, client=None):
        self._client = client if client is not None else get_sns_client()

    def find_topic(self, topic_name: str) -> Optional[str]:
        """Look up an existing topic ARN by name."""
        paginator = self._client.get_paginator("list_topics")
        for page in paginator.paginate():
            for topic in page.get("Topics", []):
                arn = topic["TopicArn"]
                if arn.rsplit(":", 1)[-1] == topic_name:
                    return arn
        return None

    def resolve_or_create(self, topic_name: str) -> Optional[str]:
        """
        Return the ARN for ``topic_name``, creating the topic if needed.

        An "already exists" conflict counts as success. Any other creation
        error is logged and leaves the topic unresolved (returns None).
        """
        try:
            arn = self._client.create_topic(Name=topic_name)["TopicArn"]
            logger.info("Topic %s resolved", topic_name)
            return arn
        except ClientError as err:
            if _is_already_exists(err):
                return self.find_topic(topic_name)
            logger.error("Failed to create topic %s: %s", topic_name, err)
            return None

    def publish(self, topic_name: str, payload: bytes) -> str:
        """
        Publish a UTF-8 JSON payload to ``topic_name``.

        Returns:
            The bus message id.

        Raises:
            TopicUnavailableError: If the topic could not be resolved.
        """
        arn = self.resolve_or_create(topic_name)
        if not arn:
            raise TopicUnavailableError(f"Topic {topic_name} is unavailable")
        response = self._client.publish(TopicArn=arn, Message=payload.decode("utf-8"))
        return response["MessageId"]
