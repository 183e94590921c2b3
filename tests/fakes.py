"""In-memory stand-in for the parts of the Supabase client the app uses."""
import copy
import itertools
import uuid
from datetime import datetime, timezone
from types import SimpleNamespace

from postgrest.exceptions import APIError

AUTO_INT_KEYS = {"profiles": "id", "user_roles": "id", "courts": "court_id"}
UNIQUE_COLUMNS = {"profiles": ("username", "email")}


def _now():
    return datetime.now(timezone.utc).isoformat()


class FakeQuery:
    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = "select"
        self.columns = None
        self.payload = None
        self.filters = []
        self.order_by = None
        self.descending = False
        self.max_rows = None
        self.skip = 0

    def select(self, columns="*"):
        if self.op == "select":
            self.columns = None if columns.strip() == "*" else [c.strip() for c in columns.split(",")]
        return self

    def insert(self, payload):
        self.op = "insert"
        self.payload = payload
        return self

    def update(self, payload):
        self.op = "update"
        self.payload = payload
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def neq(self, column, value):
        self.filters.append(lambda row: row.get(column) != value)
        return self

    def in_(self, column, values):
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column, desc=False):
        self.order_by = column
        self.descending = desc
        return self

    def limit(self, count):
        self.max_rows = count
        return self

    def offset(self, count):
        self.skip = count
        return self

    def _matches(self, row):
        return all(f(row) for f in self.filters)

    def execute(self):
        self.db.queries.append((self.table, self.op))
        failure = self.db.failures.get((self.table, self.op))
        if failure is not None:
            raise failure
        rows = self.db.tables.setdefault(self.table, [])
        if self.op == "insert":
            return SimpleNamespace(data=[self.db.insert_row(self.table, self.payload)])
        if self.op == "update":
            matched = [row for row in rows if self._matches(row)]
            for row in matched:
                self.db.check_unique(self.table, self.payload, exclude=row)
                row.update(self.payload)
            return SimpleNamespace(data=copy.deepcopy(matched))
        if self.op == "delete":
            matched = [row for row in rows if self._matches(row)]
            self.db.tables[self.table] = [row for row in rows if not self._matches(row)]
            return SimpleNamespace(data=copy.deepcopy(matched))

        matched = [row for row in rows if self._matches(row)]
        if self.order_by:
            matched.sort(
                key=lambda row: (row.get(self.order_by) is None, row.get(self.order_by)),
                reverse=self.descending,
            )
        matched = matched[self.skip:]
        if self.max_rows is not None:
            matched = matched[:self.max_rows]
        if self.columns:
            matched = [{c: row.get(c) for c in self.columns} for row in matched]
        return SimpleNamespace(data=copy.deepcopy(matched))


class FakeAuthAdmin:
    def __init__(self, auth):
        self.auth = auth
        self.deleted = []
        self.fail_create = None

    def create_user(self, attributes):
        if self.fail_create is not None:
            raise self.fail_create
        email = attributes.get("email")
        if any(u.email == email for u in self.auth.users.values()):
            raise Exception("A user with this email address has already been registered")
        user = self.auth.new_user(email=email, user_metadata=attributes.get("user_metadata"))
        user.email_confirmed = attributes.get("email_confirm", False)
        user.password = attributes.get("password")
        return SimpleNamespace(user=user)

    def delete_user(self, user_id):
        self.deleted.append(user_id)
        self.auth.users.pop(user_id, None)


class FakeAuth:
    def __init__(self):
        self.users = {}
        self.tokens = {}
        self.sent_otps = []
        self.signed_out = 0
        self.admin = FakeAuthAdmin(self)

    def new_user(self, email=None, phone=None, user_metadata=None, app_metadata=None):
        user = SimpleNamespace(
            id=str(uuid.uuid4()),
            email=email,
            phone=phone,
            user_metadata=user_metadata or {},
            app_metadata=app_metadata or {},
            created_at=_now(),
            updated_at=None,
            password=None,
        )
        self.users[user.id] = user
        return user

    def issue_token(self, user, token=None):
        token = token or f"token-{user.id}"
        self.tokens[token] = user
        return token

    def get_user(self, jwt=None):
        user = self.tokens.get(jwt)
        if user is None:
            raise Exception("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=user)

    def sign_in_with_password(self, credentials):
        for user in self.users.values():
            if user.email == credentials["email"] and user.password == credentials["password"]:
                token = self.issue_token(user)
                return SimpleNamespace(user=user, session=SimpleNamespace(access_token=token))
        raise Exception("Invalid login credentials")

    def sign_in_with_otp(self, credentials):
        self.sent_otps.append(credentials["phone"])
        return SimpleNamespace(user=None, session=None)

    def verify_otp(self, params):
        if params["token"] != "123456" or params["phone"] not in self.sent_otps:
            raise Exception("Token has expired or is invalid")
        user = next((u for u in self.users.values() if u.phone == params["phone"]), None)
        if user is None:
            user = self.new_user(phone=params["phone"])
        token = self.issue_token(user)
        return SimpleNamespace(user=user, session=SimpleNamespace(access_token=token))

    def sign_out(self):
        self.signed_out += 1


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.queries = []
        self.failures = {}
        self.auth = FakeAuth()
        self._ids = itertools.count(1)

    def table(self, name):
        return FakeQuery(self, name)

    def check_unique(self, table, payload, exclude=None):
        for column in UNIQUE_COLUMNS.get(table, ()):
            value = payload.get(column)
            if value is None:
                continue
            for row in self.tables.get(table, []):
                if row is not exclude and row.get(column) == value:
                    raise APIError({
                        "message": f'duplicate key value violates unique constraint "{table}_{column}_key"',
                        "code": "23505",
                        "hint": None,
                        "details": f"Key ({column})=({value}) already exists.",
                    })

    def insert_row(self, table, payload):
        self.check_unique(table, payload)
        row = dict(payload)
        key = AUTO_INT_KEYS.get(table)
        if key and key not in row:
            row[key] = next(self._ids)
        elif key is None and "id" not in row:
            row["id"] = str(uuid.uuid4())
        row.setdefault("created_at", _now())
        row.setdefault("updated_at", None)
        self.tables.setdefault(table, []).append(row)
        return copy.deepcopy(row)

    def add_account(self, email, role=None, token=None, first_name="Test", last_name="User",
                    app_metadata=None, with_profile=True):
        """Auth user + profile (+ role row); returns the bearer token"""
        user = self.auth.new_user(email=email, app_metadata=app_metadata)
        user.password = "secret123"
        if with_profile:
            profile = self.insert_row("profiles", {
                "auth_id": user.id,
                "email": email,
                "username": email.split("@")[0],
                "first_name": first_name,
                "last_name": last_name,
                "display_name": f"{first_name} {last_name[:1]}".strip(),
            })
            if role:
                self.insert_row("user_roles", {
                    "user_id": profile["id"],
                    "org_id": "org-1",
                    "location_id": "loc-1",
                    "role": role,
                })
        return self.auth.issue_token(user, token)
