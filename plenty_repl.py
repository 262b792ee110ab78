import argparse
import logging
import readline  # line editing for input()
import sys

import plenty

PROMPT = '---> '
EXIT_WORDS = ('exit', 'q', 'quit')

BANNER = r"""
:::::::::  :::        :::::::::: ::::    ::: ::::::::::: :::   :::
:+:    :+: :+:        :+:        :+:+:   :+:     :+:     :+:   :+:
+:+    +:+ +:+        +:+        :+:+:+  +:+     +:+      +:+ +:+
+#++:++#+  +#+        +#++:++#   +#+ +:+ +#+     +#+       +#++:
+#+        +#+        +#+        +#+  +#+#+#     +#+        +#+
#+#        #+#        #+#        #+#   #+#+#     #+#        #+#
###        ########## ########## ###    ####     ###        ###
"""


def plenty_repl(machine=None, read=input):
    print(BANNER)
    print('Type "quit" or input an end of file (Ctrl+D) to quit.')

    m = machine or plenty.Machine()

    try:
        cmd = read(PROMPT).strip()
        while cmd not in EXIT_WORDS:
            print(m.eval(cmd))
            cmd = read(PROMPT).strip()
    except EOFError:
        print()  # perfectly acceptable
    return 0


def run_source(text, machine=None):
    m = machine or plenty.Machine()
    try:
        result = m.run_program(text)
    except plenty.PlentyError as e:
        print('Error: %s' % e, file=sys.stderr)
        return 1
    print('\n'.join(result))
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(prog='plenty',
                                     description='Plenty stack interpreter')
    parser.add_argument('program', nargs='?',
                        help='file to run; starts the read loop if omitted')
    parser.add_argument('-c', '--command', metavar='TEXT',
                        help='run TEXT as a program')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='print status messages')
    parser.add_argument('--debug', action='store_true',
                        help='print debug messages')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING)
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    elif args.verbose:
        logging.getLogger().setLevel(logging.INFO)

    if args.command is not None:
        return run_source(args.command)

    if args.program is not None:
        try:
            with open(args.program, encoding='utf-8') as source:
                text = source.read()
        except OSError as e:
            print('Failed to read %s: %s' % (args.program, e), file=sys.stderr)
            return 1
        return run_source(text)

    return plenty_repl()


if __name__ == '__main__':
    sys.exit(main())
