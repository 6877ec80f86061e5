from reportable.accessors.sql import SQLAccessor
