import os
import sys

if __name__ == '__main__':
    print('Hook ran')
    python = 'py' if sys.platform == 'win32' else 'python'
    targets = 'pyguild examples dev tests'

    format_command = f'{python} -m ruff format {targets}'
    check_command = f'{python} -m ruff check {targets}'

    if os.system(format_command) == 0:
        if os.system(check_command) != 0:
            print(f'Linting failed, please run "{check_command} --fix" to fix them automatically.')
            sys.exit(1)
