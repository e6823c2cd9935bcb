import asyncio
import functools
import inspect


def debounce(wait: float):
    """
    Откладывает вызов до тех пор, пока не пройдет wait секунд без новых вызовов.
    Выполняется только последний вызов, корутины запускаются отдельной задачей.
    """
    def decorator(func):
        handle = None

        def fire(*args, **kwargs):
            nonlocal handle
            handle = None
            if inspect.iscoroutinefunction(func):
                asyncio.ensure_future(func(*args, **kwargs))
            else:
                func(*args, **kwargs)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            nonlocal handle
            if handle is not None:
                handle.cancel()
            loop = asyncio.get_running_loop()
            handle = loop.call_later(wait, functools.partial(fire, *args, **kwargs))

        def cancel():
            nonlocal handle
            if handle is not None:
                handle.cancel()
                handle = None

        wrapper.cancel = cancel
        return wrapper
    return decorator
