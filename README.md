# mythos

Building blocks for a home media server's library scanner. The package works
out what a video file is from its path, finds video files on disk, reads
technical metadata through `ffprobe`, and loads the server's settings and
token-signing secret.

## Modules

### `mythos.identify`: movies

`identify_movie(path)` returns an `Identity(title, year)`.

- It reads `The.Matrix.1999.1080p.BluRay.x264-GROUP.mkv` as
  `Identity(title="The Matrix", year=1999)`.
- When the file stem has no `<title> <year>` pattern, it tries the parent
  directory. For example, `The Matrix (1999)/the.matrix.mkv` gives
  "The Matrix", 1999.
- If neither has a year, the title is the cleaned stem and `year` is `None`.

A year is a 19xx or 20xx number followed by a separator or by the end of the
name. So for `2001 A Space Odyssey 1968` the year is 1968.

`clean(raw)` turns `.`, `_` and `-` into spaces and collapses runs of
whitespace.

### `mythos.identify_tv`: TV episodes

`identify_tv(path)` returns a `TvIdentity`, or `None` when no pattern fits.
A `TvIdentity` has these fields:

- `series`
- `year`
- `season_number`
- `episode_number`
- `episode_title`

The patterns are tried in order:

1. `SxxEyy` in the filename. The forms `S02 E01`, `S01.E01`, `S03EP01` and
   `S01E01E02` are accepted. In the last form the first episode is used.
2. `NxMM` in the filename. The episode needs at least two digits, so `1x3`
   is rejected.
3. A season directory (`S01`, `Season 01` or `Specials`, which is season 0)
   holding a file whose name starts with `E<digits>`, such as
   `E01 - Killeroo.mkv`.

The series name comes from the nearest parent directory that is a real name.
These directories are skipped:

- season directories
- sidecar directories such as `Sample`, `Extras`, `Bonus`, `Featurettes` or
  `Trailers`

A directory that carries a season suffix, such as `Star Trek TNG S01`, defers
to its own parent when that parent names the series.

A trailing `(YYYY)` in the series directory becomes `year`.

The episode title is the text after the episode marker, cut at the first
quality or codec tag such as `1080p`, `WEB-DL` or `x264`.

`strip_trailing_season_suffix(name)` returns the cleaned part of a directory
name before a season suffix, for example `"HOC S03"` gives `"HOC"`. It
returns `None` when the name has no such suffix.

### `mythos.walk`: discovery

`video_files(root)` returns a sorted list of `Path` objects for every video
file below `root`. It skips hidden files and directories, meaning names that
start with `.`.

`is_video(path)` checks the extension against `VIDEO_EXTENSIONS`, ignoring
case. The extensions are:

- mkv
- mp4
- m4v
- avi
- mov
- webm
- ts
- m2ts
- wmv

### `mythos.probe`: technical metadata

`probe(path, ffprobe="ffprobe")` runs
`ffprobe -v error -print_format json -show_format -show_streams <path>` and
returns a `Probe`. A `Probe` holds:

- the container, which is the first name in ffprobe's `format_name`
- the video and audio codecs
- the duration in seconds
- the width and height
- the colour primaries, transfer and space
- a list of `Subtitle` streams

A `Subtitle` holds:

- the stream index
- the codec
- whether it is image-based
- the language
- the title
- the default and forced flags

`probe` raises `ProbeError` in these cases:

- ffprobe cannot be started
- ffprobe exits with a non-zero status
- ffprobe prints output that is not UTF-8
- ffprobe prints malformed JSON

`parse_probe_output(text)` does the parsing on its own, for JSON you already
have.

### `mythos.scan`: scan results

`ScanReport` is a dataclass with these fields:

- `added`
- `updated`
- `removed`
- `enriched`
- `errors`
- `duration_ms`

`file_stats(path)` returns `(size_in_bytes, mtime)`. The `mtime` is a
timezone-aware UTC `datetime`.

### `mythos.config`: settings

`Config` is a frozen dataclass. Its fields and defaults are:

| Field | Default |
| --- | --- |
| `listen` | `"0.0.0.0:8080"` |
| `data_dir` | `./data` |
| `log_filter` | `"info,mythos=debug,sqlx=warn"` |
| `cookie_secure` | `True` |
| `token_ttl_days` | `30` |
| `tmdb_api_key` | `None` |

Invalid values raise `ValueError`.

`Config.load(environ=None)` builds a `Config` in three layers, each
overriding the one before:

1. The defaults above.
2. A TOML file. It is read from `MYTHOS_CONFIG`, or from `./mythos.toml` if
   that file exists.
3. `MYTHOS_<FIELD>` environment variables, for example `MYTHOS_LISTEN` or
   `MYTHOS_TOKEN_TTL_DAYS`.

`environ` defaults to `os.environ`.

These methods give paths inside `data_dir`:

- `db_path()`
- `posters_dir()`
- `transcode_dir()`
- `subtitles_dir()`

### `mythos.secret`: token-signing secret

`resolve(data_dir, environ=None)` returns the secret as bytes. It uses the
first of these that exists:

1. The `MYTHOS_JWT_SECRET` environment variable, as base64.
2. The file `<data_dir>/jwt.secret`, as base64.
3. A new 32-byte random secret. It is written atomically to that file, with
   mode 0600 on POSIX systems.

`resolve` raises `SecretError` in these cases:

- the value is not valid base64
- the value decodes to fewer than 32 bytes
- the file cannot be read or written

`secret_path(data_dir)` gives the file's location.

## Example

```python
from pathlib import Path
from mythos.identify_tv import identify_tv

ident = identify_tv(Path("Severance (2022)/Season 01/Severance.S01E03.mkv"))
print(ident.series, ident.year, ident.season_number, ident.episode_number)
# Severance 2022 1 3
```

## What this package does not do

The package provides the parts a scanner is built from, not a scanner or a
server. It has none of the following:

- a database or any other storage for libraries, movies, series or episodes
- a routine that walks a whole library and records the files it finds, or
  prunes the ones that have gone
- metadata or poster lookups from an online service. The `tmdb_api_key`
  setting is only carried in `Config`.
- an HTTP server
- a web interface
- a command-line program

## Installing

```
pip install .
```

Probing needs `ffprobe` from FFmpeg on your `PATH`, or pass its location to
`probe()`. Everything else uses only the standard library.

## Running the tests

```
pip install ".[test]"
pytest
```