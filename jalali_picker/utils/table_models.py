from __future__ import annotations

import pandas as pd
from PySide6.QtCore import QAbstractTableModel, QModelIndex, Qt


class DataFrameTableModel(QAbstractTableModel):
    def __init__(
        self,
        dataframe: pd.DataFrame | None = None,
        header_labels: dict[str, str] | None = None,
    ) -> None:
        super().__init__()
        self._dataframe = (
            dataframe.copy() if dataframe is not None else pd.DataFrame()
        )
        self._header_labels = (
            {str(key): str(value) for key, value in header_labels.items()}
            if header_labels
            else {}
        )

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:  # noqa: N802
        if parent.isValid():
            return 0
        return len(self._dataframe)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:  # noqa: N802
        if parent.isValid():
            return 0
        return len(self._dataframe.columns)

    def data(self, index: QModelIndex, role: int = Qt.DisplayRole):  # noqa: ANN001
        if not index.isValid():
            return None
        value = self._dataframe.iat[index.row(), index.column()]
        if role == Qt.DisplayRole:
            if pd.isna(value):
                return ""
            return str(value)
        if role == Qt.TextAlignmentRole:
            return Qt.AlignCenter
        return None

    def headerData(
        self,
        section: int,
        orientation: Qt.Orientation,
        role: int = Qt.DisplayRole,
    ):  # noqa: N802, ANN001
        if role != Qt.DisplayRole:
            return None
        if orientation == Qt.Horizontal:
            column_key = str(self._dataframe.columns[section])
            localized = self._header_labels.get(column_key)
            if localized:
                return localized
            return column_key.replace("_", " ").title()
        return str(section + 1)

    def set_dataframe(self, dataframe: pd.DataFrame) -> None:
        self.beginResetModel()
        self._dataframe = dataframe.copy()
        self.endResetModel()

    def dataframe(self) -> pd.DataFrame:
        return self._dataframe.copy()
