import json
import logging
import time
from typing import Callable, Optional

import boto3
import click
from botocore.exceptions import BotoCoreError, ClientError

from bg_tasks.reconcile_native_deposits import NativeDepositReconciliationJob
from core.config import settings
from core.constants import NetworkChain
from core.context import WorkerContext, build_worker_context
from log import setup_logging_to_console, setup_logging_to_file

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def parse_order_id(body: str) -> Optional[str]:
    """Order id from a raw or JSON encoded message body."""
    try:
        message = json.loads(body)
    except (TypeError, ValueError):
        message = body

    if isinstance(message, dict):
        message = message.get("orderId") or message.get("order_id")

    if isinstance(message, (str, int)) and not isinstance(message, bool):
        order_id = str(message).strip()
        return order_id or None
    return None


class NativeDepositQueueConsumer:
    def __init__(
        self,
        sqs_client,
        queue_url: str,
        handler: Callable[[str], object],
        wait_time_seconds: int = 20,
        idle_sleep_seconds: float = 5,
    ):
        self.sqs_client = sqs_client
        self.queue_url = queue_url
        self.handler = handler
        self.wait_time_seconds = wait_time_seconds
        self.idle_sleep_seconds = idle_sleep_seconds

    def _delete(self, message):
        self.sqs_client.delete_message(
            QueueUrl=self.queue_url, ReceiptHandle=message["ReceiptHandle"]
        )

    def process_message(self, message) -> bool:
        """Run the handler for one message. True when the message was acknowledged."""
        order_id = parse_order_id(message.get("Body"))

        if order_id is None:
            logger.error("Dropping message without order id: %s", message.get("Body"))
            self._delete(message)
            return True

        try:
            result = self.handler(order_id)
        except Exception as e:
            # Left on the queue, SQS redelivers it after the visibility timeout
            logger.error(
                "Error processing order %s, leaving it for redelivery: %s",
                order_id,
                e,
                exc_info=True,
            )
            return False

        logger.info("Processed order %s: %s", order_id, result)
        self._delete(message)
        return True

    def poll(self) -> int:
        """Receive and process at most one task. Returns the number received."""
        response = self.sqs_client.receive_message(
            QueueUrl=self.queue_url,
            MaxNumberOfMessages=1,
            WaitTimeSeconds=self.wait_time_seconds,
        )

        messages = response.get("Messages", [])
        for message in messages:
            self.process_message(message)
        return len(messages)

    def run(self):
        while True:
            try:
                if not self.poll():
                    logger.info("No new messages. Waiting...")
                    time.sleep(self.idle_sleep_seconds)
            except (BotoCoreError, ClientError) as e:
                logger.error("Error receiving from %s: %s", self.queue_url, e)
                time.sleep(self.idle_sleep_seconds)
            except Exception as e:
                logger.error(
                    "Error in native deposit sqs listener: %s", e, exc_info=True
                )
                time.sleep(self.idle_sleep_seconds)


def is_configured(context: WorkerContext) -> bool:
    if context.etherscan_service is None:
        logger.error("Etherscan not configured")
        return False

    if not context.native_method.account:
        logger.error("EVM account not configured")
        return False

    return True


def get_queue_name(network: NetworkChain) -> str:
    return f"{settings.EVM_NATIVE_CONFIRM_QUEUE_PREFIX}-{network.value}"


def create_consumer(
    context: WorkerContext, sqs_client
) -> Optional[NativeDepositQueueConsumer]:
    if not is_configured(context):
        return None

    queue_url = sqs_client.get_queue_url(QueueName=get_queue_name(context.network))[
        "QueueUrl"
    ]
    job = NativeDepositReconciliationJob(context)
    consumer = NativeDepositQueueConsumer(
        sqs_client,
        queue_url,
        job.run,
        wait_time_seconds=settings.SQS_WAIT_TIME_SECONDS,
        idle_sleep_seconds=settings.SQS_IDLE_SLEEP_SECONDS,
    )

    logger.info(
        "Listening on %s for %s deposits to %s",
        queue_url,
        context.native_method.asset,
        context.native_method.account,
    )
    return consumer


@click.command()
@click.option(
    "--network",
    default=NetworkChain.ethereum.value,
    type=click.Choice([n.value for n in NetworkChain]),
    help="Blockchain network to use",
)
def main(network: str):
    setup_logging_to_console()
    setup_logging_to_file(
        app=f"native_deposit_sqs_listener_{network}", level=logging.INFO, logger=logger
    )

    network_chain = NetworkChain(network)
    context = build_worker_context(settings, network_chain)
    sqs_client = boto3.client(
        "sqs",
        aws_access_key_id=settings.SQS_API_KEY,
        aws_secret_access_key=settings.SQS_API_SECRET,
        region_name=settings.AWS_REGION,
    )

    logger.info("Starting the SQS listener for %s native deposits...", network)
    consumer = create_consumer(context, sqs_client)
    if consumer is not None:
        consumer.run()


if __name__ == "__main__":
    main()
