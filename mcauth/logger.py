import asyncio
import inspect
import logging
import time

import aiohttp
import sentry_sdk


class Logger:
    def __init__(
        self,
        debug=False,
        level: int = logging.INFO,
        name: str = "mcauth",
        log_file: str = None,
        discord_webhook: str = None,
        sentry_dsn: str = None,
        ssdk: sentry_sdk = None,
    ):
        """Initializes the logger class

        Args:
            debug (bool, optional): Show debugging. Defaults to False.
            level (int, optional): The logging level. Defaults to logging.INFO.
            name (str, optional): Name of the underlying logger. Defaults to "mcauth".
            log_file (str, optional): Also write records to this file. Defaults to None.
            discord_webhook (str, optional): Webhook that receives critical messages. Defaults to None.
            sentry_dsn (str, optional): Sentry dsn to report exceptions to. Defaults to None.
            ssdk (sentry_sdk, optional): An already initialised sentry_sdk. Defaults to None.
        """
        self.DEBUG = debug
        self.webhook = discord_webhook
        self.logging = logging.getLogger(name)
        self.logging.setLevel(logging.DEBUG if self.DEBUG else level)

        if not self.logging.handlers:
            formatter = logging.Formatter(
                "%(asctime)s %(levelname)s %(name)s: %(message)s",
                datefmt="%d-%b %H:%M:%S",
            )
            handlers = [logging.StreamHandler()]
            if log_file is not None:
                handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
            for handler in handlers:
                handler.setFormatter(formatter)
                self.logging.addHandler(handler)

        if self.DEBUG:
            self.logging.info("Debugging enabled")

        if sentry_dsn is not None and ssdk is None:
            sentry_sdk.init(
                dsn=sentry_dsn,
                traces_sample_rate=1.0,
                profiles_sample_rate=0.6,
            )
            self.sentry_sdk = sentry_sdk
        elif ssdk is not None:
            self.sentry_sdk = ssdk
        else:
            self.sentry_sdk = None

    @classmethod
    def from_config(cls, config) -> "Logger":
        return cls(
            debug=config.debug,
            level=config.log_level,
            log_file=config.log_file,
            discord_webhook=config.discord_webhook,
            sentry_dsn=config.sentry_dsn,
        )

    @staticmethod
    def stack_trace(stack):
        """Returns the calling module.function"""
        frame = stack[1] if len(stack) > 1 else stack[0]
        return (
            frame.filename.replace("\\", "/").split("/")[-1].split(".")[0]
            + "."
            + f"{frame.function}"
        )

    def _fmt(self, *args) -> str:
        message = " ".join([str(arg) for arg in args])
        return f"[{self.stack_trace(inspect.stack()[1:])}] {message}"

    def debug(self, *args):
        self.logging.debug(self._fmt(*args))

    def info(self, *args):
        self.logging.info(self._fmt(*args))

    def warning(self, *args):
        self.logging.warning(self._fmt(*args))

    def war(self, *args):
        """Alias for warning"""
        self.logging.warning(self._fmt(*args))

    def error(self, *args, **kwargs):
        self.logging.error(self._fmt(*args), **kwargs)

    def critical(self, *args):
        message = self._fmt(*args)
        self.logging.critical(message)
        self.hook(message)

    def exception(self, message, *_, exception: Exception = None):
        """Logs an exception and reports it to sentry when enabled"""
        message = self._fmt(message)
        if exception is None:
            self.logging.exception(message)
        else:
            self.logging.error(
                f"{message}: {exception.__class__.__name__}: {exception}",
                exc_info=(type(exception), exception, exception.__traceback__),
            )
            if self.sentry_sdk is not None:
                sentry_sdk.capture_exception(exception)

    def hook(self, message: str):
        if not self.webhook:
            return
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(self.async_hook(message))
        else:
            asyncio.ensure_future(self.async_hook(message))

    async def async_hook(self, message: str):
        if not self.webhook:
            return
        try:
            async with aiohttp.ClientSession() as session, session.post(
                self.webhook,
                json={"content": message},
            ) as resp:
                if resp.status != 204:
                    self.logging.error(f"Failed to send message to webhook: {resp.status}")
        except aiohttp.ClientError as err:
            self.logging.error(f"Failed to reach webhook: {err}")

    def timer(self, func: callable, *args, **kwargs):
        if inspect.iscoroutinefunction(func):
            raise TypeError(f"{func.__name__} is a coroutine, use async_timer")

        start = time.perf_counter()
        res = func(*args, **kwargs)
        end = time.perf_counter()

        tDelta = self.auto_range_time(end - start)
        self.debug(f"Function {func.__name__} took {tDelta}")

        if self.sentry_sdk is not None:
            with sentry_sdk.start_transaction(
                name=f"{func.__name__}", op=f"{func.__name__}"
            ):
                sentry_sdk.set_context("timing", {"duration": tDelta})
        return res

    async def async_timer(self, func: callable, *args, **kwargs):
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"{func.__name__} is not a coroutine, use timer")

        start = time.perf_counter()
        res = await func(*args, **kwargs)
        end = time.perf_counter()

        tDelta = self.auto_range_time(end - start)
        self.debug(f"(ASYNC) Function {func.__name__} took {tDelta}")

        if self.sentry_sdk is not None:
            with sentry_sdk.start_transaction(
                name=f"{func.__name__}", op=f"{func.__name__}"
            ):
                sentry_sdk.set_context("timing", {"duration": tDelta})
        return res

    @staticmethod
    def auto_range_time(seconds: float) -> str:
        """
        Returns a time string for a given number of seconds

        Args:
            seconds (float): The number of seconds

        Returns:
            str: The time string
        """

        units = {
            "hr": str(int(seconds // 3600)),
            "min": str(int(seconds // 60)),
            "s": str(int(seconds)),
            "ms": str(int(seconds * 1000)),
            "us": str(int(seconds * 1000000)),
            "ns": str(int(seconds * 1000000000)),
        }

        best = ("ns", units["ns"])
        units = sorted(units.items(), key=lambda x: len(x[1]))
        for unit in units:
            if unit[1] != "0":
                best = unit
                break

        return f"{best[1]} {best[0]}"
