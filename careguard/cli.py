"""
Interactive console for the care portal's role gate.
Change the session state and watch the guard decide and navigate.
"""

from careguard.config import CLINICAL_STAFF_ROLES
from careguard.guards import HistoryRouter, RoleGuard
from careguard.models import AccessPolicy, Session, parse_roles
from careguard.state import AuthStore

HELP = """Commands:
  login ROLE       sign in a demo user with ROLE (any text is accepted)
  login-norole     sign in a demo user without a role
  logout           sign out
  loading          mark the session as loading again
  allow R1,R2      replace the allowed roles ('allow' alone = nobody)
  state            show the current state and decision
  quit             exit"""


class OfflineIdentity:
    """Identity client stand-in for the console: nothing to call."""

    def current_user(self):
        raise RuntimeError("no identity service in console mode")

    def login(self, email, password):
        raise RuntimeError("use 'login ROLE' in console mode")

    def logout(self):
        return None


def demo_user(role) -> Session:
    return Session(user_id="demo", email="demo@care-portal.local",
                   first_name="Demo", last_name="User", role=role)


def show(store, guard, router):
    user = store.user
    who = f"{user.display_name} (role={user.role})" if user else "(nobody)"
    print(f"[state] user={who} loading={store.is_loading}")
    print(f"[gate] allowed={guard.policy.describe()} decision={guard.decision.value}")
    print(f"[router] current={router.current or '-'} pushes={len(router.history)}")


def handle(command: str, store, guard, router) -> bool:
    """Apply one console command. Returns False when the user wants to leave."""
    verb, _, arg = command.partition(" ")
    verb = verb.lower()
    before = len(router.history)

    if verb in {"quit", "exit"}:
        return False
    if verb == "help":
        print(HELP)
        return True
    if verb == "login":
        if not arg.strip():
            print("[error] usage: login ROLE")
            return True
        store.set_user(demo_user(arg.strip().upper()))
    elif verb == "login-norole":
        store.set_user(demo_user(None))
    elif verb == "logout":
        store.logout()
    elif verb == "loading":
        store.begin_loading()
    elif verb == "allow":
        guard.set_allowed_roles(AccessPolicy.of(*parse_roles(arg)))
    elif verb != "state":
        print(f"[error] unknown command '{verb}' (try 'help')")
        return True

    for path in router.history[before:]:
        print(f"[navigate] {path}")
    show(store, guard, router)
    return True


def main():
    print("=== Care Portal: Role Gate Console ===\n")

    try:
        raw = input(f"Allowed roles [{','.join(CLINICAL_STAFF_ROLES)}]: ").strip()
    except (EOFError, KeyboardInterrupt):
        print("\nExiting.")
        return
    roles = parse_roles(raw) if raw else list(CLINICAL_STAFF_ROLES)

    store = AuthStore(OfflineIdentity())
    router = HistoryRouter()
    guard = RoleGuard(store, router, AccessPolicy.of(*roles))

    print(HELP)
    show(store, guard, router)

    while True:
        try:
            command = input("\ngate> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nExiting.")
            break
        if not command:
            continue
        if not handle(command, store, guard, router):
            print("Goodbye.")
            break

    guard.close()


if __name__ == "__main__":
    main()
