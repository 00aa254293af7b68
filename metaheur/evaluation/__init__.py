from .exporter import ResultExporter, export_all_results, history_frame

__all__ = ['ResultExporter', 'export_all_results', 'history_frame']
