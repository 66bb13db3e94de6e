from components.work_loads.record_generator import RecordConfig, RecordGenerator


class WorkLoad:
    def __init__(self, seed=None):
        self.seed = seed

    def records(self, num_records, prefix_share=0.5, id_length=8, reserved=()):
        """Generate sample records whose identifiers avoid `reserved`."""
        config = RecordConfig(id_length=id_length, prefix_share=prefix_share, seed=self.seed)
        generator = RecordGenerator(config)
        generator.reserve(reserved)
        return generator.batch(num_records)


__all__ = ["RecordConfig", "RecordGenerator", "WorkLoad"]
