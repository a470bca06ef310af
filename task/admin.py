from django.contrib import admin
from django_summernote.admin import SummernoteModelAdmin

from .models import Attachment, Task

# Register your models here.

class SubtaskInline(admin.TabularInline):
    model = Task
    fk_name = 'parent'
    fields = ('title', 'status', 'progress')
    extra = 0


class AttachmentInline(admin.TabularInline):
    model = Attachment
    extra = 0


@admin.register(Task)
class TaskAdmin(SummernoteModelAdmin):
    list_display = ('title', 'due_date', 'status', 'priority', 'board', 'owner')
    list_filter = ('status', 'priority', 'recurring')
    search_fields = ('title', 'description')
    summernote_fields = ('description',)
    inlines = [SubtaskInline, AttachmentInline]
