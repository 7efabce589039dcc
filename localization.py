MEMO_TEMPLATE = "x{mult} / missing {missing} / added {added} / run {run}XP"


class Translator:
    def __init__(self, language: str = "en") -> None:
        self.language = language
        self.translations = {
            "en": {},
            "ja": {
                MEMO_TEMPLATE: "倍率{mult} / 欠け{missing} / 追加{added} / ラン{run}XP",
                "Chest Press": "チェストプレス",
                "Seated Row": "シーテッドロー",
                "Lat Pulldown": "ラットプルダウン",
                "Leg Press": "レッグプレス",
                "Abdominal Crunch": "アブドミナルクランチ",
                "Arm Curl": "アームカール",
                "Extra Exercise": "追加種目",
                "Gym Apprentice": "筋トレ見習い",
                "Novice Protein Drinker": "初級プロテイン飲み",
                "Push-It Beginner": "追い込みビギナー",
                "Set Craftsman": "セット職人",
                "Heavy Weight Hopeful": "高重量の志願者",
                "Routine Guardian": "ルーティン守護者",
                "Self-Aware Muscle": "意識高い系マッスル",
                "Gym Resident": "ジムの住人",
                "Bicep Storyteller": "上腕二頭筋の語り部",
                "Captive of Soreness": "筋肉痛の虜",
                "Messenger of the Split": "部位分割の伝達者",
                "Seeker of Failure": "追い込みの求道者",
                "Incline Explorer": "インクラインの探究者",
                "Form Police": "フォーム警察",
                "Hypertrophy Seeker": "筋肥大の探求者",
                "Sage of Strict Form": "ストリクトの賢者",
                "Body-Building Revolutionary": "ボディメイクの革命児",
                "Demon of the Cut": "減量期の鬼",
                "Caretaker": "管理人",
                "Avatar of the Bulk": "増量期の化身",
                "High-Protein Evangelist": "高タンパクの伝道師",
                "Magician": "魔術師",
                "Alchemist": "錬金術師",
                "Whey Judge": "ホエイ界の審査員",
                "Muscle Philosopher": "筋肉の哲学者",
                "Master of Form Forging": "フォーム錬成の達人",
                "Traveler of Explosive Gains": "爆伸びの旅人",
                "Pump Summoner": "パンプの召喚士",
                "Drop Set Champion": "ドロップセットの覇者",
                "Superset Dancer": "スーパーセットの舞姫",
                "Bard of Range of Motion": "可動域の吟遊詩人",
                "Connoisseur of the Squeeze": "効かせの吟味者",
                "Sage Between Sets": "セット間の賢者",
                "Ruler of Muscle Fibers": "筋線維の支配者",
                "Forger of Dense Physiques": "高密度ボディの錬成者",
                "Conqueror of the Machines": "マシン支配の覇者",
                "Pilgrim of Training": "鍛錬の求道者",
                "Rep Wizard": "レップの魔術師",
                "Muscle Architect": "筋肉構築の建築士",
                "One Who Speaks With Weights": "重量との対話者",
                "Limit Breaker": "限界突破の戦士",
                "Prophet of Iron and Sweat": "鉄と汗の預言者",
                "Sage of Weights": "ウェイトの賢者",
                "Training Titan": "トレーニングの巨人",
                "Legend of Transformation": "肉体改造の伝説",
                "Guardian of Strength": "筋力の守護者",
                "Revolutionary of the Iron Game": "鍛錬界の革命児",
                "Evangelist of Progress Logs": "成長記録の伝道師",
                "Overlord of Set Counts": "セット回数の覇王",
                "Muscle Emperor": "筋帝王",
            },
        }

    def gettext(self, key: str) -> str:
        return self.translations.get(self.language, {}).get(key, key)

translator = Translator()
