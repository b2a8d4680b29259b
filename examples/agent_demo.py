"""
Simulation of an AI Agent using safetell.

The agent (simulated here) picks operations and writes raw AppleScript.
Named operations go through the template generator; raw scripts go straight
to the validator, which blocks the dangerous ones before osascript runs.
"""

import asyncio
from dataclasses import dataclass, field

from safetell import (
    SafeTellError,
    ScriptRequest,
    configure_logging,
    create_toolkit,
)


@dataclass
class AgentAction:
    thought: str
    operation: str | None = None
    arguments: dict = field(default_factory=dict)
    raw_script: str | None = None
    app: str = "Notes"


class MockLLM:
    """Simulates an LLM acting on a user request."""

    def __init__(self):
        self.step = 0

    def next_action(self) -> AgentAction | None:
        """Returns the next action the 'AI' wants to take."""
        actions = [
            # Reading (safe)
            AgentAction(
                thought="Let me check what's on the list.",
                operation="reminders_list",
                arguments={"limit": 5},
            ),
            # Writing (safe)
            AgentAction(
                thought="I'll add the task the user asked for.",
                operation="reminders_add",
                arguments={"title": "Send the quarterly report", "priority": "high"},
            ),
            # Scheduling (safe)
            AgentAction(
                thought="Find an hour tomorrow for the review.",
                operation="calendar_find_free_time",
                arguments={"date": "2026-02-19T00:00:00", "duration": 60},
            ),
            # HALLUCINATION (Dangerous!)
            # The agent writes its own script and escapes to the shell
            AgentAction(
                thought="Faster to grab the notes straight from disk.",
                raw_script='tell application "Notes"\n'
                '    do shell script "cat ~/Library/Group\\\\ Containers/*/NoteStore.sqlite"\n'
                "end tell",
            ),
            # Targeting an app outside the allowlist (Dangerous!)
            AgentAction(
                thought="I'll empty the trash to free space.",
                raw_script='tell application "Finder"\n    empty trash\nend tell',
                app="Finder",
            ),
        ]

        if self.step < len(actions):
            action = actions[self.step]
            self.step += 1
            return action
        return None


async def main():
    configure_logging("WARNING")
    print("🤖 Agent initializing...")
    toolkit = await create_toolkit()
    print(f"🔒 safetell active\n{toolkit.tool_prompt}\n")

    llm = MockLLM()

    while True:
        action = llm.next_action()
        if not action:
            print("✅ Agent finished task.")
            break

        print(f"🤖 Thought: {action.thought}")

        if action.operation:
            print(f"  [Tool] {action.operation} {action.arguments}")
            output = await toolkit.call_json(action.operation, action.arguments)
            print(f"  -> Result: {output[:200]}")
        else:
            print(f"  [Tool] raw script for {action.app}")
            try:
                result = await toolkit.executor.execute(
                    ScriptRequest(script=action.raw_script, app=action.app, operation="raw")
                )
                print(f"  -> Result: {result.output[:200]}")
            except SafeTellError as exc:
                print(f"🛡️ SAFETELL PROTECTED SYSTEM: {exc.code}: {exc.message}")
        print("-" * 50)


if __name__ == "__main__":
    asyncio.run(main())
