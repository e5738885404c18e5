from dataclasses import dataclass

import structlog

from scoped_current import Current, CurrentGuard, NoCurrentError, ScopeSettings, setup_logger

settings = ScopeSettings()
setup_logger(settings.log)

log = structlog.get_logger()


@dataclass
class Foo:
    text: str


def print_text() -> None:
    log.info(Current(Foo).text)
    Current(Foo).text = 'world!'


def main() -> None:
    with CurrentGuard(Foo(text='hello')):
        print_text()
        print_text()

    try:
        print_text()
    except NoCurrentError:
        log.exception('Error')


if __name__ == '__main__':
    main()
