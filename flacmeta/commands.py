import json
from pathlib import Path

from . import core


class CommandException(Exception):
    pass


def open_flac(file):
    path = Path(file)
    if not path.is_file():
        raise CommandException(f'File does not exist: {path}')
    return core.open(path)


def parse_assignment(text):
    key, sep, value = text.partition('=')
    if not sep or not key:
        raise CommandException(f'Expected KEY=VALUE, got: {text}')
    return key, value


def describe_cover(picture):
    if not picture:
        return None
    return {
        'type': picture.picture_type,
        'mime': picture.mime,
        'description': picture.description,
        'width': picture.width,
        'height': picture.height,
        'depth': picture.depth,
        'colors': picture.colors,
        'size': len(picture.data),
    }


def show(file, as_json, **kwargs):
    with open_flac(file) as session:
        info = session.streaminfo
        cover = describe_cover(session.cover)

        if as_json:
            print(json.dumps({
                'path': str(session.path),
                'blocks': [{
                    'type': block.block_type.name,
                    'code': block.header.type_code,
                    'offset': block.offset,
                    'length': block.header.length,
                    'last': block.is_last,
                } for block in session.blocks],
                'streaminfo': info.as_dict() if info else None,
                'vendor': session.vendor,
                'comments': [[c.key, c.value] for c in session.comments],
                'cover': cover,
            }, indent=2))
            return

        print(f'path:    {session.path}')
        if info:
            print(f'stream:  {info.sample_rate} Hz, {info.channels} ch, {info.bits_per_sample} bit,'
                  f' {info.duration:.2f} s')
        print(f'vendor:  {session.vendor or ""}')
        print('blocks:')
        for block in session.blocks:
            print(f'    {block.offset:>8}  {block.header}')
        print('comments:')
        for comment in session.comments:
            print(f'    {comment}')
        if cover:
            print(f'cover:   {cover["mime"]} {cover["width"]}x{cover["height"]} ({cover["size"]} bytes)')


def get(file, key, **kwargs):
    with open_flac(file) as session:
        print(session.get(key))


def set(file, assignments, output, **kwargs):
    with open_flac(file) as session:
        for assignment in assignments:
            session.set(*parse_assignment(assignment))
        target = session.save(output)
    print(f'Updated {len(assignments)} comment(s) in {target}')


def remove(file, keys, ignore_missing, output, **kwargs):
    with open_flac(file) as session:
        for key in keys:
            session.remove(key, ignore_if_missing=ignore_missing)
        target = session.save(output)
    print(f'Removed {len(keys)} comment(s) from {target}')


def cover(file, image, mime, description, output, **kwargs):
    image = Path(image)
    if not image.is_file():
        raise CommandException(f'Image does not exist: {image}')

    with open_flac(file) as session:
        session.set_cover(image.read_bytes(), mime, description or '')
        picture = session.cover
        target = session.save(output)
    print(f'Added {picture.mime} cover ({len(picture.data)} bytes) to {target}')


def uncover(file, ignore_missing, output, **kwargs):
    with open_flac(file) as session:
        session.remove_cover(ignore_if_missing=ignore_missing)
        target = session.save(output)
    print(f'Removed cover from {target}')


def extract_cover(file, destination, **kwargs):
    with open_flac(file) as session:
        picture = session.cover
    if not picture:
        raise CommandException(f'No cover picture in {file}')

    Path(destination).write_bytes(picture.data)
    print(f'Wrote {picture.mime} cover ({len(picture.data)} bytes) to {destination}')
