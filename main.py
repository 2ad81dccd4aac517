import logging
import sys

from pumpswitch.config.config import build_arg_parser, config_from_namespace
from pumpswitch.service import PumpService
from pumpswitch.utils.duration import format_duration

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=args.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        config = config_from_namespace(args)
    except ValueError as e:
        parser.error(str(e))

    logger.info("starting pumpswitch ...")
    logger.info(f"relay pin = {config.relay_pin}")
    logger.info(f"listen on = {config.listen_addr}")
    logger.info(f"cron intervals = {config.cron_intervals}")
    logger.info(f"max cycle duration = {format_duration(config.max_on_duration)}")

    try:
        service = PumpService(config)
    except (ImportError, RuntimeError) as e:
        logger.error(f"Cannot initialize GPIO: {e}")
        return 1

    service.install_signal_handlers()
    return service.run()


if __name__ == '__main__':
    sys.exit(main())
