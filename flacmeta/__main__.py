#!/usr/bin/env python3
import argparse
import logging
import sys
from . import commands
from .errors import FlacError


def parse_args(argv=None):
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument('--verbose', '-v', action='store_true', help='Verbose mode.')

    main = argparse.ArgumentParser(parents=[parent],
        epilog='Use "flacmeta [command] --help" for more information about a command.',
        description='Reads and rewrites FLAC metadata without touching the audio.',
        formatter_class=argparse.RawTextHelpFormatter)
    sub = main.add_subparsers(metavar='command', dest='command')
    sub.required = True

    def add_subparser(command, help, description=''):
        parser = sub.add_parser(command, help=help, description=help + description,
                                formatter_class=argparse.RawTextHelpFormatter, parents=[parent])
        parser.add_argument('file', help='FLAC file to process.')
        return parser

    def add_output(parser):
        parser.add_argument('--output', '-o', metavar='path',
            help='Path to write the updated file to.'
            '\n\nIf omitted, the input file is overwritten in place.')

    show = add_subparser('show', 'Display metadata blocks, stream info, comments and cover.')
    show.add_argument('--json', dest='as_json', action='store_true', help='Prints JSON output.')

    get = add_subparser('get', 'Print the value of a comment.',
        '\n\nKeys are matched case-insensitively.')
    get.add_argument('key', help='Comment key, e.g. TITLE.')

    set_ = add_subparser('set', 'Add or update comments.',
        '\n\nAssigning a key that already exists replaces its value; the last'
          '\nassignment of a key wins.')
    set_.add_argument('assignments', nargs='+', metavar='KEY=VALUE', help='Comments to set.')
    add_output(set_)

    remove = add_subparser('remove', 'Remove comments.')
    remove.add_argument('keys', nargs='+', metavar='KEY', help='Comment keys to remove.')
    remove.add_argument('--ignore-missing', action='store_true',
        help='Do not fail when a key is not present.')
    add_output(remove)

    cover = add_subparser('cover', 'Set the front cover picture.',
        '\n\nAny existing cover picture is replaced. Unless --mime is given, the'
          '\nimage type and dimensions are detected from the image itself, which'
          '\nmust then be at least 512 bytes long.')
    cover.add_argument('image', help='Image file to embed.')
    cover.add_argument('--mime', help='MIME type of the image, e.g. image/jpeg.')
    cover.add_argument('--description', help='Picture description.')
    add_output(cover)

    uncover = add_subparser('uncover', 'Remove the cover picture.')
    uncover.add_argument('--ignore-missing', action='store_true',
        help='Do not fail when there is no cover picture.')
    add_output(uncover)

    extract = add_subparser('extract-cover', 'Write the cover picture to a file.')
    extract.add_argument('destination', help='Path of the image file to write.')

    return main.parse_args(argv)


def main(argv=None):
    try:
        args = parse_args(argv)
        logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                            format='%(levelname)s %(name)s: %(message)s')
        getattr(commands, args.command.replace('-', '_'))(**vars(args))
    except (commands.CommandException, FlacError) as e:
        print(e, file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
