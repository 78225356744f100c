# devdash

A terminal dashboard that shows the development status of a project at a glance.
Four panels are kept up to date in the background:

- **Git**: current branch, counts of changed and staged files, the ten latest commits
- **CI/CD**: the ten latest GitHub Actions workflow runs and their outcome
- **Tasks**: recently updated GitHub issues, shown as todo, in progress, done or blocked
  (closed issues are done; labels containing "block" mark blocked, "progress" or "wip"
  mark in progress; pull requests are skipped)
- **Quality**: the share of passing tests from `cargo test` and the number of lint
  warnings and errors from `cargo clippy`

The same data can be served as a JSON API instead of the terminal view.

The Git panel needs the `git` command on the `PATH`; the Quality panel runs `cargo`
in the project directory.

## Installation

```
pip install .
```

## Usage

Run the terminal dashboard in the current repository:

```
devdash
```

Options:

| Option | Meaning | Default |
| --- | --- | --- |
| `-p`, `--path` | Path to the git repository | `.` |
| `-i`, `--refresh` | Refresh interval in seconds (not negative) | `5` |
| `-o`, `--owner` | GitHub repository owner | none |
| `-n`, `--repo` | GitHub repository name | none |
| `--token` | GitHub token | none |
| `-w`, `--web` | Serve the JSON API instead of the terminal view | off |
| `-V`, `--version` | Print the version and exit | |

Quality metrics are expensive to gather and refresh six times less often than
the other panels. The CI/CD and Tasks panels are filled only when `--owner`,
`--repo` and `--token` are all given; otherwise they keep showing their
"Fetching..." message.

### Keys

| Key | Action |
| --- | --- |
| `1`–`4` | Select the Git, CI/CD, Tasks or Quality panel |
| `Tab` / `Shift-Tab` | Next / previous panel |
| `q`, `Ctrl-C` | Quit |

In the terminal view a panel whose last fetch failed goes back to its
"Fetching..." message until the next successful fetch.

### Web mode

```
devdash --web
```

starts a server on `0.0.0.0`, port 3000, with these endpoints:

- `GET /api/git`
- `GET /api/ci`
- `GET /api/tasks`
- `GET /api/quality`
- `GET /api/config` (owner, repository and path)

Each status endpoint returns the latest data as JSON, or `null` until the first
successful fetch; a failed fetch keeps the previous data. Responses allow any
origin. Other paths serve files from a `static` directory under the current
working directory, with `static/index.html` as the fallback. Stop the server
with `Ctrl-C`.

## What it does not do

- It does not find the GitHub owner and repository from the git remote, and it
  does not look up a token from `gh auth token` or `GITHUB_TOKEN`; they must be
  passed on the command line.
- The security count in the Quality panel is always 0; no security audit is run.
- Workflow run durations are not fetched, so the CI/CD "Time" column shows `—`.
- The web server's address and port cannot be changed, and no front end is
  shipped; only the JSON API and whatever lies in `static/` are served.

## Development

```
pip install -e ".[test]"
pytest
```