import unittest

from fakes import FakeTrelloClient

from trello_task_cli.commands import (
    ACTIONS,
    append_description,
    dispatch,
    get_tasks,
    render_tasks,
    run_action,
    validate,
)
from trello_task_cli.errors import NotFoundError, UsageError


class AppendDescriptionTests(unittest.TestCase):
    def test_appends_after_blank_line(self):
        self.assertEqual("A\n\n📝 B", append_description("A", "B"))

    def test_empty_description_gets_marker_only(self):
        self.assertEqual("📝 B", append_description("", "B"))

    def test_existing_description_is_trimmed(self):
        self.assertEqual("A\n\n📝 B", append_description("  A\n\n", "B"))
        self.assertEqual("📝 B", append_description(" \n ", "B"))


class ValidateTests(unittest.TestCase):
    def test_unknown_action(self):
        with self.assertRaises(UsageError):
            validate("rename", ["To Do", "x"])

    def test_fixed_arity_must_match_exactly(self):
        cases = {
            "move": [["To Do", "Review PR"], ["a", "b", "c", "d"]],
            "add": [["To Do"], ["To Do", "a", "b"]],
            "delete": [[], ["To Do", "a", "b"]],
            "get": [[], ["To Do", "extra"]],
        }
        for action, bad in cases.items():
            for params in bad:
                with self.subTest(action=action, params=params):
                    with self.assertRaises(UsageError):
                        validate(action, params)

    def test_variadic_actions_join_remaining_words(self):
        spec, args = validate(
            "comment", ["In Progress", "Fix bug #42", "needs", "more", "testing"]
        )

        self.assertEqual("comment", spec.name)
        self.assertEqual(["In Progress", "Fix bug #42", "needs more testing"], args)

    def test_variadic_actions_require_text(self):
        for action in ("append", "comment"):
            with self.subTest(action=action):
                with self.assertRaises(UsageError):
                    validate(action, ["In Progress", "Fix bug #42"])
                with self.assertRaises(UsageError):
                    validate(action, ["In Progress", "Fix bug #42", " "])

    def test_each_action_carries_its_handler(self):
        self.assertIs(get_tasks, ACTIONS["get"].handler)
        for name, spec in ACTIONS.items():
            with self.subTest(action=name):
                self.assertEqual(name, spec.name)
                self.assertTrue(callable(spec.handler))

    def test_usage_strings(self):
        self.assertEqual("get <board_name> <list_name>", ACTIONS["get"].usage)
        self.assertEqual(
            "comment <board_name> <list_name> <task_name> <comment_text...>",
            ACTIONS["comment"].usage,
        )


class RenderTasksTests(unittest.TestCase):
    def test_empty_list(self):
        self.assertEqual('ℹ️ No tasks found in "Done".', render_tasks("Done", []))

    def test_descriptions_are_indented(self):
        text = render_tasks(
            "In Progress",
            [
                {"name": "Fix bug #42", "desc": "Crash on save\nSee logs"},
                {"name": "Write docs", "desc": ""},
            ],
        )

        self.assertEqual(
            '📋 Tasks in "In Progress":\n'
            "- Fix bug #42\n"
            "    Crash on save\n"
            "    See logs\n"
            "- Write docs",
            text,
        )


class DispatchTests(unittest.IsolatedAsyncioTestCase):
    async def test_move_relocates_only_the_task(self):
        client = FakeTrelloClient()

        output = await dispatch(
            client, "move", "roadmap", ["in progress", "Fix bug #42", "DONE"]
        )

        self.assertEqual('✅ Task "Fix bug #42" moved to "DONE"', output)
        self.assertEqual([("move_card", "c2", "l3")], client.mutations())
        self.assertEqual(["c3"], [c["id"] for c in client.state["cards"]["l2"]])
        moved = client.state["cards"]["l3"][0]
        self.assertEqual("l3", moved["idList"])

    async def test_move_resolves_everything_before_mutating(self):
        client = FakeTrelloClient()

        await dispatch(client, "move", "Roadmap", ["In Progress", "Fix bug #42", "Done"])

        self.assertEqual(
            [
                ("get_boards",),
                ("get_lists", "b1"),
                ("get_lists", "b1"),
                ("get_list_cards", "l2"),
                ("move_card", "c2", "l3"),
            ],
            client.calls,
        )

    async def test_move_to_missing_list_makes_no_mutation(self):
        client = FakeTrelloClient()

        with self.assertRaises(NotFoundError) as ctx:
            await dispatch(client, "move", "Roadmap", ["In Progress", "Fix bug #42", "Shipped"])

        self.assertEqual("list", ctx.exception.kind)
        self.assertEqual([], client.mutations())

    async def test_add_creates_card(self):
        client = FakeTrelloClient()

        output = await dispatch(client, "add", "Roadmap", ["to do", "Plan sprint"])

        self.assertEqual('✅ Task "Plan sprint" added to "to do"', output)
        self.assertEqual([("create_card", "l1", "Plan sprint")], client.mutations())

    async def test_delete_removes_card(self):
        client = FakeTrelloClient()

        output = await dispatch(client, "delete", "Roadmap", ["To Do", "review pr"])

        self.assertEqual('✅ Task "review pr" deleted from "To Do"', output)
        self.assertEqual([("delete_card", "c1")], client.mutations())
        self.assertEqual([], client.state["cards"]["l1"])

    async def test_delete_missing_task(self):
        client = FakeTrelloClient()

        with self.assertRaises(NotFoundError) as ctx:
            await dispatch(client, "delete", "Roadmap", ["To Do", "Ghost"])

        self.assertEqual("task", ctx.exception.kind)
        self.assertEqual([], client.mutations())

    async def test_get_lists_cards_with_descriptions(self):
        client = FakeTrelloClient()

        output = await dispatch(client, "get", "Roadmap", ["In Progress"])

        self.assertEqual(
            '📋 Tasks in "In Progress":\n- Fix bug #42\n    Crash on save\n- Write docs',
            output,
        )

    async def test_get_empty_list_stops_after_fetch(self):
        client = FakeTrelloClient()

        output = await dispatch(client, "get", "Roadmap", ["Done"])

        self.assertEqual('ℹ️ No tasks found in "Done".', output)
        self.assertEqual(
            [("get_boards",), ("get_lists", "b1"), ("get_list_cards", "l3")],
            client.calls,
        )

    async def test_append_to_existing_description(self):
        client = FakeTrelloClient()

        output = await dispatch(
            client, "append", "Roadmap", ["In Progress", "Fix bug #42", "see", "issue", "7"]
        )

        self.assertEqual('✅ Appended info to "Fix bug #42"', output)
        self.assertEqual(
            [("update_card_description", "c2", "Crash on save\n\n📝 see issue 7")],
            client.mutations(),
        )

    async def test_append_to_empty_description(self):
        client = FakeTrelloClient()

        await dispatch(client, "append", "Roadmap", ["In Progress", "Write docs", "B"])

        self.assertEqual(
            [("update_card_description", "c3", "📝 B")], client.mutations()
        )

    async def test_comment_joins_words(self):
        client = FakeTrelloClient()

        output = await dispatch(
            client,
            "comment",
            "Roadmap",
            ["In Progress", "Fix bug #42", "needs", "more", "testing"],
        )

        self.assertEqual('✅ Comment added to "Fix bug #42"', output)
        self.assertEqual(
            [("add_comment", "c2", "needs more testing")], client.mutations()
        )

    async def test_invalid_arity_makes_no_calls(self):
        client = FakeTrelloClient()

        with self.assertRaises(UsageError):
            await dispatch(client, "move", "Roadmap", ["In Progress", "Fix bug #42"])
        with self.assertRaises(UsageError):
            await dispatch(client, "archive", "Roadmap", ["In Progress"])

        self.assertEqual([], client.calls)

    async def test_missing_board(self):
        client = FakeTrelloClient()

        with self.assertRaises(NotFoundError) as ctx:
            await dispatch(client, "get", "Nope", ["To Do"])

        self.assertEqual("board", ctx.exception.kind)
        self.assertEqual([("get_boards",)], client.calls)

    async def test_run_action_uses_validated_arguments(self):
        client = FakeTrelloClient()
        spec, args = validate("comment", ["In Progress", "Write docs", "ready", "for", "review"])

        output = await run_action(client, spec, "Roadmap", args)

        self.assertEqual('✅ Comment added to "Write docs"', output)
        self.assertEqual([("add_comment", "c3", "ready for review")], client.mutations())
