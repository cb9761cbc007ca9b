from .handlers import report_to_dict, task_to_dict

__all__ = ["report_to_dict", "task_to_dict"]
