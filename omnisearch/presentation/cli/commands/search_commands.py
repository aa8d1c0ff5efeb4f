"""
Search commands for CLI.

This module provides the command handler that runs one search for any
input modality and renders the resulting state.
"""

from typing import Optional

from ....application.services.search_orchestrator import SearchOrchestrator
from ....core.entities import InputType
from ....presentation.views.results_view import ResultsController, SortOption
from ...cli.formatters.output_formatter import OutputFormatter
from ...cli.handlers.cli_handler import CommandHandler, CommandResult


class SearchCommand(CommandHandler):
    """
    Command handler for search.

    Runs the search to completion, then renders the view selected for
    the final state.
    """

    def __init__(
        self,
        formatter: OutputFormatter,
        orchestrator: SearchOrchestrator,
        controller: ResultsController
    ):
        """
        Initialize the handler.

        Args:
            formatter: Output formatter
            orchestrator: Search orchestrator
            controller: Results view bound to the same store
        """
        super().__init__(formatter)
        self.orchestrator = orchestrator
        self.controller = controller

    async def execute(
        self,
        input_type: InputType,
        value: str,
        search_type: Optional[str] = None,
        sort: str = SortOption.RELEVANCE.value,
        page: int = 1,
        as_json: bool = False,
        **kwargs
    ) -> CommandResult:
        """
        Execute the search command.

        Args:
            input_type: Modality of the input
            value: Query text, transcript, or image path
            search_type: Result-category filter
            sort: Result ordering
            page: Page to show
            as_json: Print the final state as JSON instead of a table
            **kwargs: Additional arguments

        Returns:
            CommandResult: Command execution result
        """
        if input_type == InputType.TEXT:
            request_id = await self.orchestrator.handle_text_search(value, search_type)
        elif input_type == InputType.VOICE:
            request_id = await self.orchestrator.handle_voice_search(value, search_type)
        else:
            request_id = await self.orchestrator.handle_image_search(value, search_type)

        if request_id is None:
            return self.reject(
                "Invalid search input",
                "The query is empty or too long"
            )

        state = self.orchestrator.store.state

        if as_json:
            self.formatter.print_raw(self.formatter.format_json(state.to_dict()))
        else:
            self.controller.set_sort(sort)
            self.controller.set_page(page)
            self.formatter.print(self.formatter.format_view(self.controller.current_view()))

        return CommandResult.from_state(state)
