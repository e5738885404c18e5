from dataclasses import dataclass

import structlog

from scoped_current import (
    Current,
    Derived,
    LogSettings,
    Modifier,
    SharedCell,
    derive,
    modify,
    scope,
    setup_logger,
)

setup_logger(LogSettings(json_logs=True))

log = structlog.get_logger()


@dataclass
class Window:
    title: str


@dataclass
class Theme:
    name: str


class Title(Derived, Modifier):
    def __init__(self, title: str) -> None:
        self.title = title

    @classmethod
    def derive_from(cls, obj: Window) -> 'Title':
        return cls(obj.title)

    def modify(self, obj: Window) -> None:
        obj.title = self.title


def render() -> None:
    # Every entry carries the names of the current types under `current`.
    log.info('render', title=derive(Current(Window), Title).title, theme=Current(Theme).name)
    modify(Current(Window), Title('rendered'))


def main() -> None:
    window = SharedCell(Window(title='main'))

    with scope(window, Theme('dark')):
        render()
        with scope(Window(title='popup')):
            render()
        render()

    log.info('done', title=derive(window, Title).title)


if __name__ == '__main__':
    main()
