#!/usr/bin/env python3
"""
HabitOverflow CLI - Terminal client for the HabitOverflow API
"""
import base64
import getpass
import os
import shlex
import requests
from typing import Any, Callable, Dict, List, Optional
from dotenv import load_dotenv
from app.utils.session_store import SessionState, SIGNED_IN, SIGNED_OUT

# Load environment variables
load_dotenv()

# Backend API base URL
API_BASE = os.getenv("API_BASE_URL", "http://localhost:8000")

# Optional token to resume a session started elsewhere
ACCESS_TOKEN_ENV = "HABITOVERFLOW_ACCESS_TOKEN"

REQUEST_TIMEOUT_SECONDS = 90


class ApiError(Exception):
    """Raised when the API answers with an error status"""

    def __init__(self, status_code: int, detail: str):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


class ApiClient:
    """Thin requests wrapper that sends the current session's bearer token"""

    def __init__(self, session_state: SessionState, base_url: str = API_BASE):
        self.session_state = session_state
        self.base_url = base_url.rstrip("/")

    def _headers(self, token: Optional[str] = None) -> Dict[str, str]:
        token = token or self.session_state.access_token
        return {"Authorization": f"Bearer {token}"} if token else {}

    def request(self, method: str, path: str, token: Optional[str] = None, **kwargs) -> Any:
        response = requests.request(
            method,
            f"{self.base_url}{path}",
            headers=self._headers(token),
            timeout=REQUEST_TIMEOUT_SECONDS,
            **kwargs
        )
        if response.status_code >= 400:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            raise ApiError(response.status_code, str(detail))
        return response.json()

    def get(self, path: str, **kwargs) -> Any:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs) -> Any:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs) -> Any:
        return self.request("PUT", path, **kwargs)

    def fetch_session(self, token: Optional[str]) -> Optional[Dict[str, Any]]:
        """Current session for `token`, or None when there is none or it was rejected"""
        if not token:
            return None
        try:
            return self.get("/auth/session", token=token)
        except ApiError:
            return None


class HabitCli:
    """Command handlers; each reads and updates the injected SessionState"""

    def __init__(self, api: ApiClient, session_state: SessionState):
        self.api = api
        self.session_state = session_state
        self.last_stacks: List[Dict[str, Any]] = []
        self.commands: Dict[str, Callable[[List[str]], None]] = {
            "signup": self.cmd_signup,
            "signin": self.cmd_signin,
            "google": self.cmd_google,
            "signout": self.cmd_signout,
            "whoami": self.cmd_whoami,
            "profile": self.cmd_profile,
            "dashboard": self.cmd_dashboard,
            "stacks": self.cmd_stacks,
            "add-stack": self.cmd_add_stack,
            "add-habit": self.cmd_add_habit,
            "verify": self.cmd_verify,
            "reset": self.cmd_reset,
            "points": self.cmd_points,
            "leaderboard": self.cmd_leaderboard,
            "report": self.cmd_report,
            "help": self.cmd_help,
        }

    # --- helpers ---

    def _require_auth(self) -> bool:
        if not self.session_state.is_authenticated:
            print("🔒 Sign in first (signin / signup)")
            return False
        return True

    def _resolve_stack(self, ref: str) -> Dict[str, Any]:
        """Stack by 1-based number from the last `stacks` listing, or by id"""
        if not self.last_stacks:
            self.last_stacks = self.api.get("/stacks")
        if ref.isdigit() and 0 < int(ref) <= len(self.last_stacks):
            return self.last_stacks[int(ref) - 1]
        for stack in self.last_stacks:
            if stack["id"] == ref:
                return stack
        raise ValueError(f"No stack '{ref}' (run 'stacks' to list them)")

    @staticmethod
    def _resolve_habit(stack: Dict[str, Any], ref: str) -> Dict[str, Any]:
        habits = stack.get("habits", [])
        if ref.isdigit() and 0 < int(ref) <= len(habits):
            return habits[int(ref) - 1]
        for habit in habits:
            if habit["id"] == ref:
                return habit
        raise ValueError(f"No habit '{ref}' in stack '{stack['name']}'")

    def _print_stacks(self, stacks: List[Dict[str, Any]]) -> None:
        self.last_stacks = stacks
        if not stacks:
            print("No habit stacks yet. Create one with: add-stack <name>")
            return
        for i, stack in enumerate(stacks, start=1):
            print(f"{i}. {stack['name']}")
            for j, habit in enumerate(stack.get("habits", []), start=1):
                status = habit["verification"]
                if status.get("is_verified"):
                    mark = "✅"
                elif status.get("pending_verification"):
                    mark = "⏳"
                else:
                    mark = "⬜"
                description = f" - {habit['description']}" if habit.get("description") else ""
                print(f"   {i}.{j} {mark} {habit['name']}{description}")

    # --- auth ---

    def cmd_signup(self, args: List[str]) -> None:
        """signup <email> - create an account"""
        if not args:
            print("Usage: signup <email>")
            return
        password = getpass.getpass("Password: ")
        confirm = getpass.getpass("Confirm password: ")
        data = self.api.post("/auth/signup", json={
            "email": args[0],
            "password": password,
            "confirm_password": confirm
        })
        print(f"🎉 {data['message']}")
        session = data.get("session") or {}
        if session.get("access_token"):
            self.session_state.publish(SIGNED_IN, session)
            print("Next: profile create <name> <username> [avatar_url]")

    def cmd_signin(self, args: List[str]) -> None:
        """signin <email> - sign in with email and password"""
        if not args:
            print("Usage: signin <email>")
            return
        password = getpass.getpass("Password: ")
        session = self.api.post("/auth/signin", json={"email": args[0], "password": password})
        if not session.get("access_token"):
            print("❌ Sign-in returned no session. Confirm your email first.")
            return
        self.session_state.publish(SIGNED_IN, session)

    def cmd_google(self, args: List[str]) -> None:
        """google - print the Google sign-in URL"""
        data = self.api.get("/auth/google")
        print(f"Open this URL to sign in with Google:\n{data['url']}")

    def cmd_signout(self, args: List[str]) -> None:
        """signout - end the current session"""
        if not self._require_auth():
            return
        try:
            self.api.post("/auth/signout")
        finally:
            self.session_state.publish(SIGNED_OUT, None)

    def cmd_whoami(self, args: List[str]) -> None:
        """whoami - show the signed-in user"""
        session = self.session_state.session
        if not session:
            print("Not signed in")
            return
        print(f"{session.get('email') or 'unknown email'} ({session.get('user_id')})")

    # --- profile & dashboard ---

    def cmd_profile(self, args: List[str]) -> None:
        """profile [create|edit <name> <username> [avatar_url]] - view or change your profile"""
        if not self._require_auth():
            return
        if not args:
            profile = self.api.get("/profiles/me")
            print(f"👤 {profile['name']} (@{profile['username']})")
            if profile.get("avatar_url"):
                print(f"   Avatar: {profile['avatar_url']}")
            return

        action, rest = args[0], args[1:]
        if action not in ("create", "edit") or len(rest) < 2:
            print("Usage: profile create|edit <name> <username> [avatar_url]")
            return
        payload = {"name": rest[0], "username": rest[1], "avatar_url": rest[2] if len(rest) > 2 else None}
        if action == "create":
            profile = self.api.post("/profiles", json=payload)
        else:
            profile = self.api.put("/profiles/me", json=payload)
        print(f"✓ Profile saved: {profile['name']} (@{profile['username']})")

    def cmd_dashboard(self, args: List[str]) -> None:
        """dashboard - profile and headline stats"""
        if not self._require_auth():
            return
        data = self.api.get("/dashboard")
        profile, stats = data["profile"], data["stats"]
        print(f"Welcome back, {profile['name']}!")
        print(f"  Habits:          {stats['habit_count']}")
        print(f"  Day streak:      {stats['streak']}")
        print(f"  Completion rate: {stats['completion_rate']}%")
        print(f"  Goals achieved:  {stats['goals_achieved']}")
        print(f"  Total points:    {stats['total_points']}")

    # --- stacks & habits ---

    def cmd_stacks(self, args: List[str]) -> None:
        """stacks - list your stacks and habits"""
        if not self._require_auth():
            return
        self._print_stacks(self.api.get("/stacks"))

    def cmd_add_stack(self, args: List[str]) -> None:
        """add-stack <name> - create a habit stack"""
        if not self._require_auth():
            return
        if not args:
            print("Usage: add-stack <name>")
            return
        stack = self.api.post("/stacks", json={"name": " ".join(args)})
        self.last_stacks = []
        print(f"✓ Created stack '{stack['name']}'")

    def cmd_add_habit(self, args: List[str]) -> None:
        """add-habit <stack> <name> [description] - add a habit to a stack"""
        if not self._require_auth():
            return
        if len(args) < 2:
            print("Usage: add-habit <stack> <name> [description]")
            return
        stack = self._resolve_stack(args[0])
        payload = {"name": args[1], "description": " ".join(args[2:]) or None}
        habit = self.api.post(f"/stacks/{stack['id']}/habits", json=payload)
        self.last_stacks = []
        print(f"✓ Added '{habit['name']}' to '{stack['name']}'")

    def cmd_verify(self, args: List[str]) -> None:
        """verify <stack> <habit> <image_path> - submit a photo as proof"""
        if not self._require_auth():
            return
        if len(args) < 3:
            print("Usage: verify <stack> <habit> <image_path>")
            return
        stack = self._resolve_stack(args[0])
        habit = self._resolve_habit(stack, args[1])
        with open(os.path.expanduser(args[2]), "rb") as f:
            image = base64.b64encode(f.read()).decode("ascii")

        print(f"🔍 Verifying '{habit['name']}'...")
        outcome = self.api.post(
            f"/stacks/{stack['id']}/habits/{habit['id']}/verify",
            json={"image": image}
        )
        print(("✅ " if outcome["verified"] else "❌ ") + outcome["message"])
        if outcome["verified"]:
            print(f"   Total points: {outcome.get('total_points')}  Streak: {outcome.get('streak')}")
            if outcome.get("stack_completed"):
                print(f"   🏁 Stack '{stack['name']}' complete!")
        self._print_stacks(outcome.get("stacks", []))

    def cmd_reset(self, args: List[str]) -> None:
        """reset <stack> - start a stack over"""
        if not self._require_auth():
            return
        if not args:
            print("Usage: reset <stack>")
            return
        stack = self._resolve_stack(args[0])
        self.api.post(f"/stacks/{stack['id']}/reset")
        self.last_stacks = []
        print(f"↺ Reset '{stack['name']}'")

    # --- points & reports ---

    def cmd_points(self, args: List[str]) -> None:
        """points - your points and streak"""
        if not self._require_auth():
            return
        data = self.api.get("/points/me")
        print(f"⭐ {data['total_points']} points, 🔥 {data['current_streak']} day streak")

    def cmd_leaderboard(self, args: List[str]) -> None:
        """leaderboard - all users ranked by points"""
        if not self._require_auth():
            return
        for entry in self.api.get("/leaderboard"):
            me = " ← you" if entry["is_current_user"] else ""
            print(f"{entry['rank']:>3}. {entry['username']:<20} {entry['total_points']:>6} pts  "
                  f"🔥{entry['current_streak']}{me}")

    def cmd_report(self, args: List[str]) -> None:
        """report [day|week|month] - progress report and achievements"""
        if not self._require_auth():
            return
        data = self.api.get("/reports")
        timeframes = [args[0]] if args else ["day", "week", "month"]
        for timeframe in timeframes:
            stats = data["timeframes"].get(timeframe)
            if stats is None:
                print(f"Unknown timeframe '{timeframe}' (day, week, month)")
                continue
            print(f"[{timeframe}] {stats['habits_completed']}/{stats['total_habits']} habits, "
                  f"{stats['completion_rate']}%, {stats['points_earned']} pts")
        print("Achievements:")
        for achievement in data["achievements"]:
            mark = achievement["icon"] if achievement["earned"] else "🔒"
            print(f"  {mark} {achievement['title']} - {achievement['description']}")

    def cmd_help(self, args: List[str]) -> None:
        """help - list commands"""
        for handler in self.commands.values():
            print(f"  {handler.__doc__}")
        print("  quit - leave")

    def dispatch(self, line: str) -> None:
        """Run one input line"""
        parts = shlex.split(line)
        if not parts:
            return
        handler = self.commands.get(parts[0].lower())
        if handler is None:
            print(f"Unknown command '{parts[0]}'. Type 'help' for commands.")
            return
        handler(parts[1:])

    def run(self, line: str) -> None:
        """Run one input line, reporting failures instead of raising"""
        try:
            self.dispatch(line)
        except ApiError as e:
            if e.status_code == 401 and self.session_state.is_authenticated:
                self.session_state.publish(SIGNED_OUT, None)
            print(f"❌ {e.detail}")
        except (ValueError, OSError) as e:
            print(f"❌ {e}")
        except requests.RequestException as e:
            print(f"❌ Could not reach {self.api.base_url}: {e}")


def on_session_change(event: str, session: Optional[Dict[str, Any]]) -> None:
    if event == SIGNED_IN and session:
        print(f"✓ Signed in as {session.get('email') or session.get('user_id')}")
    elif event == SIGNED_OUT:
        print("✓ Signed out")


def main():
    """Main CLI loop"""
    session_state = SessionState()
    api = ApiClient(session_state)
    unsubscribe = session_state.subscribe(on_session_change)
    session_state.initialize(lambda: api.fetch_session(os.getenv(ACCESS_TOKEN_ENV)))

    print("🏋️  HabitOverflow CLI")
    print(f"Connected to: {API_BASE}")
    print("Type 'help' for commands, 'quit' to leave\n")

    cli = HabitCli(api, session_state)

    try:
        while True:
            try:
                user_input = input("> ").strip()

                if user_input.lower() in ("quit", "exit", "q"):
                    print("👋 Bye!")
                    break

                cli.run(user_input)
                print()

            except KeyboardInterrupt:
                print("\n👋 Bye!")
                break
            except EOFError:
                print("\n👋 Bye!")
                break
    finally:
        unsubscribe()
        session_state.close()


if __name__ == "__main__":
    main()
