from rich.console import Console
from rich.text import Text

from . import types

console = Console(soft_wrap=True, highlight=False)
error_console = Console(stderr=True, soft_wrap=True, highlight=False)


def failure(err):
    error_console.print(str(err), style='red', markup=False)


def success(message: str):
    console.print(message, style='green', markup=False)


def info(message: str):
    console.print(message, style='cyan', markup=False)


def render_matchings(matchings: list[types.Matching]):
    for matching in matchings:
        console.print('----', style='white')
        console.print()

        if matching.oid:
            console.print(Text.assemble(('Id       : ', 'yellow'), (matching.oid, 'white')))

        console.print('Message  : ', style='yellow')
        for line in matching.message.split('\n'):
            console.print(Text.assemble(('           ', 'yellow'), (line, 'white')))
        console.print()

        errors = [e for e in (matching.message_error, matching.summary_error) if e]
        for i, error in enumerate(errors):
            prefix = 'Error(s) : ' if i == 0 else '           '
            console.print(Text.assemble((prefix, 'yellow'), '- ', (error, 'red')))
        console.print()


def render_examples(examples: dict[str, str]):
    console.print('=======', style='white')
    console.print()
    console.print('Your message must match one of those following patterns :', style='white', markup=False)
    console.print()

    for key, example in examples.items():
        console.print('----', style='white')
        console.print()
        console.print(f'{key.replace("_", " ").title()} : ', style='yellow', markup=False)
        console.print()
        console.print(example, style='cyan', markup=False)
