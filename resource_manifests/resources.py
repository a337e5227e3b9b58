"""Concrete resources backed by the bundled templates."""

from __future__ import annotations

from typing import Mapping, Optional, Sequence, Union

from resource_manifests.models import FlinkSqlJobSpec
from resource_manifests.render.resource import Resource


class KafkaTopic(Resource):
    """A Kafka topic, rendered with ``KafkaTopic.yaml.template``.

    ``numPartitions`` is only exported when given, so templates fall back
    to the environment for a cluster-wide default.
    """

    def __init__(
        self,
        name: str,
        num_partitions: Optional[int] = None,
        client_configs: Optional[Mapping[str, str]] = None,
    ) -> None:
        super().__init__("KafkaTopic", name=name)
        self.export("topicName", name)
        if num_partitions is not None:
            self.export("numPartitions", str(num_partitions))
        self.export("clientConfigs", dict(client_configs or {}))


class SqlJobResource(Resource):
    """A Flink SQL job, rendered with ``SqlJob.yaml.template``.

    The statements are exported as one newline-joined value; the template
    places it after ``- `` so each statement becomes its own list item.
    """

    def __init__(self, name: str, sql: Union[FlinkSqlJobSpec, Sequence[str]]) -> None:
        super().__init__("SqlJob", name=name)
        self.spec = sql if isinstance(sql, FlinkSqlJobSpec) else FlinkSqlJobSpec(sql=list(sql))
        self.export("sql", lambda: "\n".join(self.spec.sql))
