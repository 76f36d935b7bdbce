VERSION = '1.0.0'


def get_version() -> str:
    return f'v{VERSION}'
