"""Expenses and expense categories."""

from .collection import ResourceCollection
from .models import Expense, ExpenseCategory


class ExpensesService(ResourceCollection[Expense]):
    def __init__(self, client):
        super().__init__(client, "expenses", Expense)
        self.categories = ResourceCollection(client, "expense_categories", ExpenseCategory)
