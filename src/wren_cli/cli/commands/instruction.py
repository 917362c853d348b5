"""Knowledge instruction CLI commands.

Instructions guide SQL generation. A global instruction applies to every
question; the others only activate when a question matches one of theirs.
"""

import typer

from wren_cli.cli.common import json_mode, open_client
from wren_cli.cli.output import add_row, console, emit_json, make_table, truncate
from wren_cli.core.exceptions import InputValidationError
from wren_cli.core.validation import parse_id
from wren_cli.models import Instruction, InstructionCreate, InstructionUpdate

app = typer.Typer(help="Manage knowledge instructions")


def _kind(instruction: Instruction) -> str:
    return "global" if instruction.is_global else "question-matching"


@app.command("list")
@app.command("ls", hidden=True)
def list_instructions(ctx: typer.Context):
    """List all instructions."""
    with open_client(ctx) as client:
        instructions = client.knowledge.list_instructions()

    if json_mode(ctx):
        emit_json(instructions)
        return

    if not instructions:
        console.print("[yellow]No instructions found[/yellow]")
        return

    table = make_table("ID", "TYPE", "INSTRUCTION", "QUESTIONS")
    for instruction in instructions:
        questions = "-"
        if instruction.questions:
            questions = truncate("; ".join(instruction.questions), 50)
        add_row(
            table,
            instruction.id,
            "global" if instruction.is_global else "question",
            truncate(instruction.instruction, 60),
            questions,
        )
    console.print(table)


@app.command("create")
def create_instruction(
    ctx: typer.Context,
    text: str = typer.Option(..., "--text", help="Instruction text"),
    is_global: bool = typer.Option(False, "--global", help="Apply to every question"),
    questions: list[str] | None = typer.Option(
        None, "--question", help="Question that activates the instruction (repeatable)"
    ),
):
    """Create an instruction.

    Pass --global, or one or more --question values to match.
    """
    if is_global:
        request = InstructionCreate(instruction=text, is_global=True)
    elif questions:
        request = InstructionCreate(instruction=text, questions=list(questions))
    else:
        raise InputValidationError("must specify either --global or at least one --question")

    with open_client(ctx) as client:
        instruction = client.knowledge.create_instruction(request)

    if json_mode(ctx):
        emit_json(instruction)
    else:
        console.print(
            f"[green]Created instruction {instruction.id} ({_kind(instruction)})[/green]"
        )


@app.command("update")
def update_instruction(
    ctx: typer.Context,
    instruction_id: str = typer.Argument(..., help="Instruction ID"),
    text: str | None = typer.Option(None, "--text", help="New instruction text"),
    is_global: bool | None = typer.Option(
        None, "--global/--no-global", help="Make the instruction global, or not"
    ),
    questions: list[str] | None = typer.Option(
        None, "--question", help="Replacement matching questions (repeatable)"
    ),
):
    """Update an instruction's text, questions or global flag."""
    iid = parse_id(instruction_id, "instruction")
    request = InstructionUpdate(
        instruction=text,
        is_global=is_global,
        questions=list(questions) if questions else None,
    )
    if request.instruction is None and request.is_global is None and request.questions is None:
        raise InputValidationError("no changes specified; use --text, --global, or --question")

    with open_client(ctx) as client:
        instruction = client.knowledge.update_instruction(iid, request)

    if json_mode(ctx):
        emit_json(instruction)
    else:
        console.print(f"[green]Updated instruction {instruction.id}[/green]")


@app.command("delete")
def delete_instruction(
    ctx: typer.Context,
    instruction_id: str = typer.Argument(..., help="Instruction ID"),
):
    """Delete an instruction."""
    iid = parse_id(instruction_id, "instruction")
    with open_client(ctx) as client:
        client.knowledge.delete_instruction(iid)

    if json_mode(ctx):
        emit_json({"deleted": True, "id": iid})
    else:
        console.print(f"[green]Deleted instruction {iid}[/green]")
