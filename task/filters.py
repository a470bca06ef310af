import django_filters

from .choices import Priority, Status
from .models import Task


class TaskFilter(django_filters.FilterSet):
    # ?status=TODO&status=REVIEW matches either
    status = django_filters.MultipleChoiceFilter(choices=Status.choices)
    priority = django_filters.MultipleChoiceFilter(choices=Priority.choices)

    class Meta:
        model = Task
        fields = ['status', 'priority', 'board']
