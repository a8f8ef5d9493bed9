# authdemo

Two small HTTP authentication services built on WSGI with Werkzeug.

Install with the test extra to run the tests:

```
pip install -e ".[test]"
pytest
```

## Cookie-session server

`authdemo-server` reads `config/config.yaml` from the current working
directory and serves on `0.0.0.0`, port 1234. The file looks like this:

```yaml
env: local
storage_path: ./storage
http_server:
  address: localhost:1234
```

`env` selects the log output: `local` and `prod` write `key=value` text at
INFO level, `dev` writes JSON lines at DEBUG level. Any other value, a missing
file or an unreadable file makes the command print the error to standard
error and exit with status 1.

Run it with:

```
authdemo-server
```

Routes:

- `POST /sign-up` with a JSON body `{"user": "Alice", "email": "alice@example.com"}`
  stores the user in memory. A body that is not valid JSON gets a 400 reply
  `{"status": "Error", "error": "failed to decode request"}`. Signing up an
  e-mail that is already stored is logged and answered with an empty 200.
- `POST /sign-in` with the same body checks that both fields are given and
  that the e-mail is stored, then sets a `session_id` cookie valid for 24
  hours. A request that already carries a known `session_id` cookie is let
  through without looking at the body. Failed checks are logged and answered
  with an empty 200 and no cookie.
- `GET /get` prints the current users and sessions to standard output.

Requests with any method other than POST on `/sign-in` and `/sign-up` are
logged and answered with an empty reply. Other paths get a 404.

## JWT server

`authdemo-jwt` serves a login flow backed by HS256 tokens on `0.0.0.0`,
port 1234 by default:

```
authdemo-jwt
authdemo-jwt --port 8080
```

- `POST /register` with `email`, `name` and `password` (JSON or form body)
  creates an account and replies 201 Created. An e-mail that is already
  registered gives a 500 reply with the message `the user already exists`.
- `POST /login` with `email` and `password` returns
  `{"access_token": "..."}`, a token whose subject is the e-mail and which
  expires after 72 hours. Wrong credentials give a 500 reply with
  `email or password is incorrect`.
- `GET /profile` with the header `Authorization: Bearer token` returns the
  account's `email` and `name`.

Every route other than `/register` and `/login` needs a token: a missing or
malformed `Authorization` header gives 400 `Missing or malformed JWT`, a bad
or expired token gives 401 `Invalid or expired JWT`. Bodies with an
unsupported content type give 422.

## Using the pieces from Python

The in-memory user store:

```python
from authdemo.storage import UserStore, UserExistsError, UserNotFoundError

store = UserStore()
store.save("Alice", "alice@example.com")
user = store.load("alice@example.com")
print(user.name, user.email)

try:
    store.save("Alice", "alice@example.com")
except UserExistsError:
    print("already registered")

store.delete("alice@example.com")
try:
    store.load("alice@example.com")
except UserNotFoundError:
    print("gone")
```

JSON status bodies:

```python
from authdemo import response

response.ok().to_dict()                       # {"status": "OK"}
response.error("failed to decode").to_dict()  # {"status": "Error", "error": "failed to decode"}
```

Configuration and logging:

```python
from authdemo.config import load_config, must_config
from authdemo.logger import setup_logger

config = load_config("config/config.yaml")   # or must_config() for ./config/config.yaml
logger = setup_logger(config.env)
```

Building the applications yourself, for example to mount them in another WSGI
server:

```python
from authdemo.cookies import SessionStore
from authdemo.logger import setup_logger
from authdemo.server import create_app
from authdemo.storage import UserStore
from authdemo import jwt_app

session_app = create_app(setup_logger("local"), SessionStore(), UserStore())
token_app = jwt_app.create_app(secret_key=b"secret")
```

## What it does not do

- All users, accounts and sessions live in memory and are lost when the
  process stops. `storage_path` and `http_server.address` are read from the
  configuration but not used; the cookie server always listens on port 1234.
- The cookie server has no passwords and no route for signing out;
  `SessionStore.delete_cookie` exists but no route calls it.
- The JWT server keeps passwords in plain text, and its default signing key
  is a fixed value built into the package. Pass your own key to
  `jwt_app.create_app` in anything beyond a demonstration.