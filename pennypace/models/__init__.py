# Import all models so Base.metadata is populated for create_all.
from pennypace.models.budget import Budget  # noqa: F401
from pennypace.models.category import Category  # noqa: F401
from pennypace.models.expense import Expense  # noqa: F401
from pennypace.models.streak import Streak  # noqa: F401
