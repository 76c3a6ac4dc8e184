from django.core.validators import MaxValueValidator
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

FIRST_DAY = 1
LAST_DAY = 3


class MealType(models.TextChoices):
    BREAKFAST = "breakfast", _("Breakfast")
    LUNCH = "lunch", _("Lunch")
    TEA = "tea", _("Tea")


class Menu(models.Model):
    day = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(FIRST_DAY), MaxValueValidator(LAST_DAY)],
    )
    meal_type = models.CharField(max_length=20, choices=MealType.choices)
    items = models.JSONField(default=list)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        # breakfast < lunch < tea alphabetically as well as by time of day
        ordering = ["day", "meal_type"]
        constraints = [
            models.UniqueConstraint(
                fields=["day", "meal_type"],
                name="menu_unique_day_meal",
            ),
        ]

    def __str__(self) -> str:
        return f"Day {self.day} {self.meal_type}"
